# -*- coding: utf-8 -*-
"""
script2board/core/schemas/task.py

Task / WorkflowStep：一个创作任务及其工作流步骤。
- Task 拥有分镜列表（storyboards），core 只按值接收、按值返回。
- 读写 JSON 的逻辑在 core/task_store.py，这里只放结构体。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .shot import ShotRecord


STEP_TYPES = ["idea", "script", "storyboard"]
STEP_STATUSES = ["pending", "in-progress", "completed"]


@dataclass
class WorkflowStep:
	"""
	一个工作流步骤。

	base_prompt：
	- 由代码里的默认模板提供，落盘前清空（dehydrate），加载后补回（hydrate）
	- 这样改模板不需要迁移旧数据
	"""
	id: str
	type: str
	title: str
	base_prompt: str = ""
	input: str = ""
	output: str = ""
	status: str = "pending"

	def to_dict(self) -> dict:
		return {
			"id": self.id,
			"type": self.type,
			"title": self.title,
			"base_prompt": self.base_prompt,
			"input": self.input,
			"output": self.output,
			"status": self.status,
		}

	@classmethod
	def from_dict(cls, data: dict) -> "WorkflowStep":
		return cls(
			id=data.get("id", ""),
			type=data.get("type", ""),
			title=data.get("title", ""),
			base_prompt=data.get("base_prompt", "") or "",
			input=data.get("input", "") or "",
			output=data.get("output", "") or "",
			status=data.get("status", "pending") or "pending",
		)


@dataclass
class Task:
	id: str
	title: str
	created_at: str
	updated_at: str
	steps: List[WorkflowStep] = field(default_factory=list)
	storyboards: List[ShotRecord] = field(default_factory=list)
	tags: List[str] = field(default_factory=list)

	def get_step(self, step_id: str) -> WorkflowStep:
		for s in self.steps:
			if s.id == step_id:
				return s
		raise ValueError(f"step not found: {step_id}")
