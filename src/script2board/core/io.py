# -*- coding: utf-8 -*-
"""
script2board/core/io.py

目的：
- 统一管理 TaskPack 的路径约定（哪些文件放哪里）。
- 统一创建 TaskPack 的目录骨架（ensure_dirs）。

TaskPack 约定核心路径：
- task.json        : 任务本体（步骤输入输出 + 分镜列表，含 id 和媒体 url）
- storyboard.md    : 导出的 Markdown 分镜表
- logs/llm.jsonl   : 每次 LLM 调用一行
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict


@dataclass(frozen=True)
class TaskPaths:
	"""
	把 TaskPack 内部常用文件路径集中在一个结构体里。
	只存路径，不做读写；ensure_dirs() 负责创建目录骨架。
	"""
	root: Path
	task: Path
	storyboard_md: Path
	logs_dir: Path
	llm_log: Path

	def ensure_dirs(self) -> None:
		# 重复执行必须安全
		for d in (self.root, self.logs_dir):
			d.mkdir(parents=True, exist_ok=True)


def task_paths(task_dir: str | Path) -> TaskPaths:
	"""
	根据 task_dir 生成 TaskPaths（不创建目录）。
	"""
	root = Path(task_dir)

	return TaskPaths(
		root=root,
		task=root / "task.json",
		storyboard_md=root / "storyboard.md",
		logs_dir=root / "logs",
		llm_log=root / "logs" / "llm.jsonl",
	)


def now_iso() -> str:
	return datetime.now(timezone.utc).isoformat()


def append_jsonl(path: Path, record: Dict[str, Any]) -> None:
	"""
	追加一行 JSON（审计日志用）。
	"""
	path.parent.mkdir(parents=True, exist_ok=True)
	with path.open("a", encoding="utf-8") as f:
		f.write(json.dumps(record, ensure_ascii=False) + "\n")
