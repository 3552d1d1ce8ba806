# -*- coding: utf-8 -*-
"""
script2board/core/workflow.py

目的：
- 定义默认的三步工作流模板（创意构思 -> 剧本生成 -> 分镜绘制）及其基础提示词。
- hydrate / dehydrate：基础提示词只活在代码里，不落盘。

为什么这样：
- 提示词会频繁调整，旧任务加载时自动拿到新模板，不需要迁移数据。
"""

from __future__ import annotations

from typing import Dict, List

from script2board.core.schemas import Task, WorkflowStep


STEP_ORDER = ["step-1", "step-2", "step-3"]

# 剧本生成（输出分镜表）对应的步骤
STORYBOARD_TABLE_STEP = "step-2"

# 可选的生成模型（OpenAI 兼容网关上的模型 id）
MODELS = [
	"qwen-flash",
	"deepseek-v3.2",
	"deepseek-v3.2-thinking",
	"qwen3-8b",
	"gemini-3-flash-preview-search",
	"grok-4-1-fast-reasoning",
	"doubao-seed-1.8",
]


IDEA_PROMPT = """你是一位全网数百万粉丝的短视频内容创作专家，擅长读书分享、历史故事、知识科普、娱乐搞笑等各类深度且有吸引力的脚本。请根据用户的想法，创作一段开头极具吸引力、内容言之有物的短视频口播文案。

**核心创作原则：**
1. **黄金3秒开头**：用反常识、强冲突、具体场景或悬念问题开场，拒绝平铺直叙。
2. **内容要有获得感**：每一句话都提供信息增量、情绪价值或认知颠覆，拒绝流水账和空洞说教。
3. **去 AI 味**：禁止使用“首先、其次、最后”“综上所述”等僵硬连接词，像朋友聊天一样自然，多用短句。

**输出要求：**
- 纯文本文案，不包含镜头/画面描述。
- 语言简练有力，适合口播，控制在 200-500 字。
- 使用 Markdown 格式。

用户想法："""


SCRIPT_PROMPT = """你是一个专业的分镜脚本师和 AI 绘图提示词专家。请根据以下文案，输出两部分内容：

### 1. 完整口播文稿
原样整理后的完整口播文案。

### 2. 视觉分镜表
把文案拆解为分镜表格，每个分镜 3-5 秒。

**表格要求：**
- 必须是 4 列的 Markdown 表格：| 镜号 | 脚本文案 | 画面生成提示词 (Image Prompt) | 视频生成提示词 (Video Prompt) |
- 镜号从 0 开始：0 号是封面镜头（标题/缩略图画面，脚本文案写“[封面]”，视频提示词写“-”），之后按 1、2、3 递增。
- 脚本文案：该镜头对应的口播片段，所有镜头拼起来等于完整口播文稿。
- 画面生成提示词：英文，逗号分隔，按权重排序，包含画面内容、环境光影、构图与质量标签。
- 画面中绝对不要出现任何文字、字母或标志。
- 视频生成提示词：英文，描述运镜与动作，例如 slow push in, camera pans left。

文案内容："""


STORYBOARD_PROMPT = """你是一个专业的 AI 绘图/视频提示词专家。请根据以下分镜脚本，为每个分镜生成：
1. 关键帧图片生成提示词（适用于 Midjourney/DALL-E）
2. 视频生成提示词（适用于 Runway/Pika）

要求：
- 提示词要详细、具体
- 包含画面构图、光线、色调
- 符合短视频的视觉风格

分镜内容："""


def create_default_steps() -> List[WorkflowStep]:
	return [
		WorkflowStep(id="step-1", type="idea", title="创意构思", base_prompt=IDEA_PROMPT),
		WorkflowStep(id="step-2", type="script", title="剧本生成", base_prompt=SCRIPT_PROMPT),
		WorkflowStep(id="step-3", type="storyboard", title="分镜绘制", base_prompt=STORYBOARD_PROMPT),
	]


def default_prompts() -> Dict[str, str]:
	return {s.id: s.base_prompt for s in create_default_steps()}


def hydrate_task(task: Task) -> Task:
	"""
	加载后补回 base_prompt：代码模板优先，模板里没有的步骤保留原值。
	"""
	prompts = default_prompts()
	for s in task.steps:
		s.base_prompt = prompts.get(s.id) or s.base_prompt or ""
	return task


def dehydrate_step(step: WorkflowStep) -> dict:
	data = step.to_dict()
	data.pop("base_prompt", None)
	return data
