# -*- coding: utf-8 -*-
"""
generate_step/prompt.py

这个文件做什么：
- 把步骤的基础提示词 + 用户输入拼成发给 LLM 的内容。
- 这里不调用模型，只做 prompt 组装。
"""

from __future__ import annotations

from script2board.core.schemas import WorkflowStep


SYSTEM_PROMPT = (
	"你是短视频创作工作流里的内容生成助手。\n"
	"严格按照用户消息里的输出要求作答，不要输出与任务无关的寒暄和解释。\n"
	"如果要求输出表格，必须使用标准 Markdown 表格，每行一个镜头。\n"
)


def build_user_prompt(step: WorkflowStep, input_text: str) -> str:
	"""
	基础提示词在前，用户输入在后，中间空一行。
	"""
	return step.base_prompt + "\n\n" + input_text
