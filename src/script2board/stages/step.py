# -*- coding: utf-8 -*-
"""
script2board/stages/step.py

目的：
- 一个工作流步骤 = 一个 stage：读 task.json，调 LLM，写回输出。
- 剧本生成步骤（输出分镜表）额外把输出同步进分镜列表。

输入：
- TaskPack/task.json
- 步骤 input：第一步取 ctx.idea；后续步骤 input 为空时沿用上一步的 output

输出：
- task.json：步骤 output/status；剧本生成步骤还会更新 storyboards
"""

from __future__ import annotations

from script2board.core.io import TaskPaths
from script2board.core.schemas import Task
from script2board.core.sync import SyncController
from script2board.core.task_store import load_task, save_task, update_step, update_storyboards
from script2board.core.workflow import STEP_ORDER, STORYBOARD_TABLE_STEP
from script2board.skills.generate_step.skill import GenerateStepSkill
from script2board.stages.base import StageContext


def resolve_input(task: Task, step_id: str, idea: str = "") -> str:
	step = task.get_step(step_id)

	if step_id == STEP_ORDER[0] and idea.strip():
		return idea.strip()

	if step.input.strip():
		return step.input

	i = STEP_ORDER.index(step_id)
	if i == 0:
		return ""

	return task.get_step(STEP_ORDER[i - 1]).output


class StepStage:
	def __init__(self, step_id: str):
		if step_id not in STEP_ORDER:
			raise ValueError(f"unknown step: {step_id}")

		self.step_id = step_id
		self.name = step_id

	def run(self, paths: TaskPaths, ctx: StageContext) -> None:
		task = load_task(paths.task)
		step = task.get_step(self.step_id)

		input_text = resolve_input(task, self.step_id, ctx.idea)
		if not input_text.strip():
			raise ValueError(f"{self.step_id}: empty input (上一步还没有输出，或缺少 --idea)")

		update_step(task, self.step_id, input=input_text, status="in-progress")
		save_task(paths.task, task)

		sync = None
		if self.step_id == STORYBOARD_TABLE_STEP:
			sync = SyncController()
			sync.on_initial_load(step.output, task.storyboards)

		llm = ctx.llm_client
		owns_client = llm is None
		if owns_client:
			from script2board.providers.llm.openai_client import load_openai_client
			llm = load_openai_client(project_root=ctx.project_root, model=ctx.model or None)

		try:
			result = GenerateStepSkill(llm, log_path=paths.llm_log).run(
				step, input_text, task.storyboards, sync=sync,
			)
		finally:
			if owns_client:
				llm.close()

		if result.used_fallback:
			# 已有输出和分镜保持不变，再把错误抛给上层停止后续步骤
			print(f"[WARN] {self.step_id} failed, keep previous output")
			update_step(task, self.step_id, status="completed" if step.output else "pending")
			save_task(paths.task, task)
			raise RuntimeError(f"{self.step_id} failed: {result.error}")

		update_step(task, self.step_id, output=result.output, status="completed")
		if sync is not None:
			update_storyboards(task, result.shots)

		save_task(paths.task, task)
