# -*- coding: utf-8 -*-
"""
generate_step/skill.py

这个文件做什么：
- 把“跑一个工作流步骤”的完整流程封装成一个 skill：
  1) build prompt
  2) 流式调用 LLM，逐段累积输出
  3) 每次累积的文本都交给 SyncController，分镜列表随流更新
  4) 失败则保留上一次的输出和分镜（不清空用户已有的工作）

注意：
- 这里不关心接的是哪家模型，只依赖一个 llm_client 接口：
  llm_client.chat_stream(system_prompt: str, user_prompt: str) -> Iterator[str]
- sync 为 None 时只生成文本，不碰分镜（创意构思这类纯文本步骤）。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from script2board.core.io import append_jsonl, now_iso
from script2board.core.schemas import ShotRecord, WorkflowStep
from script2board.core.sync import SyncController
from .prompt import SYSTEM_PROMPT, build_user_prompt


@dataclass
class GenerateResult:
	output: str
	shots: List[ShotRecord]
	used_fallback: bool
	error: str


class GenerateStepSkill:
	def __init__(self, llm_client: Any, log_path: Optional[Path] = None):
		self.llm_client = llm_client
		self.log_path = log_path

	def _log(self, step: WorkflowStep, user_prompt: str, output: str, error: str) -> None:
		if self.log_path is None:
			return

		cfg = getattr(self.llm_client, "cfg", None)
		append_jsonl(self.log_path, {
			"at": now_iso(),
			"step_id": step.id,
			"model": getattr(cfg, "model", ""),
			"prompt_chars": len(user_prompt),
			"output_chars": len(output),
			"error": error,
		})

	def run(
		self,
		step: WorkflowStep,
		input_text: str,
		shots: List[ShotRecord],
		sync: Optional[SyncController] = None,
	) -> GenerateResult:
		user_prompt = build_user_prompt(step, input_text)

		acc = ""
		current = shots

		try:
			for chunk in self.llm_client.chat_stream(SYSTEM_PROMPT, user_prompt):
				acc += chunk
				if sync is None:
					continue

				# 每段都对照调用前的分镜合并：流到一半时还没出现的镜头不能把媒体丢掉
				r = sync.on_external_text(acc, shots)
				if r.applied:
					current = r.shots

			if not acc.strip():
				raise ValueError("LLM returned empty output")

			self._log(step, user_prompt, acc, "")
			return GenerateResult(output=acc, shots=current, used_fallback=False, error="")

		except Exception as e:
			# 失败就回退到调用前的状态，保证流水线不中断
			self._log(step, user_prompt, acc, str(e))
			return GenerateResult(output=step.output, shots=shots, used_fallback=True, error=str(e))
