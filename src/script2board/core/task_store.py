# -*- coding: utf-8 -*-
"""
script2board/core/task_store.py

目的：
- 定义 task.json 的读写方法，任务是分镜列表的唯一持有者。
- 分镜列表原样落盘（包括 id 和媒体 url），core 只按值传入传出。

注意：
- 加载要容错：缺字段就用默认值，老数据没有 storyboards 时当作空列表。
- 落盘前去掉 base_prompt（见 core/workflow.py）。
"""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import List

from script2board.core.io import now_iso, task_paths
from script2board.core.schemas import ShotRecord, STEP_STATUSES, Task, WorkflowStep
from script2board.core.workflow import create_default_steps, dehydrate_step, hydrate_task


DEFAULT_TITLE = "未命名项目"


def new_task(title: str = "") -> Task:
	now = now_iso()
	return Task(
		id=f"task-{uuid.uuid4().hex[:12]}",
		title=title.strip() or DEFAULT_TITLE,
		created_at=now,
		updated_at=now,
		steps=create_default_steps(),
		storyboards=[],
		tags=[],
	)


def task_to_dict(task: Task) -> dict:
	return {
		"id": task.id,
		"title": task.title,
		"created_at": task.created_at,
		"updated_at": task.updated_at,
		"steps": [dehydrate_step(s) for s in task.steps],
		"storyboards": [s.to_dict() for s in task.storyboards],
		"tags": list(task.tags),
	}


def task_from_dict(data: dict) -> Task:
	task = Task(
		id=data.get("id", ""),
		title=data.get("title", "") or DEFAULT_TITLE,
		created_at=data.get("created_at", ""),
		updated_at=data.get("updated_at", ""),
		steps=[WorkflowStep.from_dict(s) for s in data.get("steps") or []],
		storyboards=[ShotRecord.from_dict(s) for s in data.get("storyboards") or []],
		tags=list(data.get("tags") or []),
	)

	if not task.steps:
		task.steps = create_default_steps()

	return hydrate_task(task)


def load_task(path: Path) -> Task:
	if not path.exists():
		raise FileNotFoundError(f"missing {path}")

	data = json.loads(path.read_text(encoding="utf-8"))
	return task_from_dict(data)


def save_task(path: Path, task: Task) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(json.dumps(task_to_dict(task), ensure_ascii=False, indent=2), encoding="utf-8")


def touch(task: Task) -> Task:
	task.updated_at = now_iso()
	return task


def update_step(task: Task, step_id: str, **changes) -> Task:
	"""
	只改一个步骤的 input/output/status。
	"""
	step = task.get_step(step_id)

	for k, v in changes.items():
		if k not in ("input", "output", "status"):
			raise ValueError(f"unknown step field: {k}")
		if k == "status" and v not in STEP_STATUSES:
			raise ValueError(f"invalid status: {v}")
		setattr(step, k, v)

	return touch(task)


def update_storyboards(task: Task, shots: List[ShotRecord]) -> Task:
	task.storyboards = list(shots)
	return touch(task)


def list_tasks(tasks_root: str | Path) -> List[Task]:
	"""
	扫描 tasks_root 下所有 TaskPack，按最近更新时间倒序。
	"""
	root = Path(tasks_root)
	if not root.exists():
		return []

	tasks = []
	for d in sorted(root.iterdir()):
		paths = task_paths(d)
		if d.is_dir() and paths.task.exists():
			tasks.append(load_task(paths.task))

	return sorted(tasks, key=lambda t: t.updated_at, reverse=True)
