# -*- coding: utf-8 -*-
"""
script2board/core/schemas/shot.py

ShotRecord：分镜表的一行，解析、合并、序列化三者共享的契约。
- core 定义，skills/stages 使用。
- 不依赖任何业务层（LLM、存储等）。
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass


COVER_SHOT_NUMBER = 0


def new_shot_id() -> str:
	"""
	生成一个与内容无关的 id。
	只保证会话内唯一，不要从它的值推断任何顺序。
	"""
	return f"shot-{uuid.uuid4().hex}"


@dataclass
class ShotRecord:
	"""
	一个分镜单元。

	id：
	- 创建时生成一次，之后不再变（UI 渲染和 merge 都靠它认“同一个镜头”）
	- 不从 shot_number 或文本推导

	shot_number：
	- 业务主键，0 保留给封面，正整数是普通镜头
	- 解析器不强制唯一

	image_url / video_url：
	- 空串表示“未挂载”
	- 只由用户操作写入，文本里永远不带
	"""
	id: str
	shot_number: int
	script: str = ""
	image_prompt: str = ""
	image_url: str = ""
	video_prompt: str = ""
	video_url: str = ""

	@property
	def is_cover(self) -> bool:
		return self.shot_number == COVER_SHOT_NUMBER

	def to_dict(self) -> dict:
		return {
			"id": self.id,
			"shot_number": self.shot_number,
			"script": self.script,
			"image_prompt": self.image_prompt,
			"image_url": self.image_url,
			"video_prompt": self.video_prompt,
			"video_url": self.video_url,
		}

	@classmethod
	def from_dict(cls, data: dict) -> "ShotRecord":
		# 老数据可能缺字段或 id，缺 id 就补一个新的
		return cls(
			id=data.get("id") or new_shot_id(),
			shot_number=int(data.get("shot_number", 0)),
			script=data.get("script", "") or "",
			image_prompt=data.get("image_prompt", "") or "",
			image_url=data.get("image_url", "") or "",
			video_prompt=data.get("video_prompt", "") or "",
			video_url=data.get("video_url", "") or "",
		)
