# -*- coding: utf-8 -*-
"""
script2board/pipeline/orchestrator.py

目的：
- 作为“阶段调度器”：按固定顺序执行工作流步骤。
- 支持 `run_until(..., until="step-2")`：跑到指定步骤停止。

注意：
- orchestrator 不关心任何具体业务（怎么拼提示词、怎么解析分镜）。
- orchestrator 只负责：创建 paths、按顺序调用 stage、打印状态。
"""

from __future__ import annotations

from script2board.core.io import task_paths
from script2board.core.task_store import load_task
from script2board.core.workflow import STEP_ORDER
from script2board.stages.base import Stage, StageContext
from script2board.stages.step import StepStage


def run_until(task_dir: str, ctx: StageContext, until: str, start: str = STEP_ORDER[0]) -> None:
	if until not in STEP_ORDER:
		raise ValueError(f"unknown step: {until}")
	if start not in STEP_ORDER:
		raise ValueError(f"unknown step: {start}")
	if STEP_ORDER.index(start) > STEP_ORDER.index(until):
		raise ValueError(f"start {start} is after until {until}")

	paths = task_paths(task_dir)
	if not paths.task.exists():
		raise FileNotFoundError(f"missing {paths.task} (先运行 init)")
	paths.ensure_dirs()

	for name in STEP_ORDER[STEP_ORDER.index(start):]:
		stage: Stage = StepStage(name)
		print(f"[RUN] step={stage.name}")
		stage.run(paths, ctx)

		if name == until:
			break

	task = load_task(paths.task)
	for s in task.steps:
		print(f"[OK] {s.id} {s.title}: {s.status}")
	print(f"[OK] shots = {len(task.storyboards)}")
