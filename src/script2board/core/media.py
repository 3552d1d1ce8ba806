# -*- coding: utf-8 -*-
"""
core/media.py

这个文件做什么：
- 结构化视图里的“挂媒体”操作：按 id 找到镜头，只改 image_url / video_url / video_prompt。
- 不经过解析器，也从不改 shot_number / script / image_prompt。
- 纯函数：返回新列表，入参不动。id 找不到时内容原样返回。
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from script2board.core.schemas import ShotRecord


def find_shot(shots: List[ShotRecord], shot_id: str) -> Optional[ShotRecord]:
	for s in shots:
		if s.id == shot_id:
			return s
	return None


def _update(shots: List[ShotRecord], shot_id: str, **changes) -> List[ShotRecord]:
	return [replace(s, **changes) if s.id == shot_id else s for s in shots]


def attach_image(shots: List[ShotRecord], shot_id: str, url: str) -> List[ShotRecord]:
	return _update(shots, shot_id, image_url=url)


def remove_image(shots: List[ShotRecord], shot_id: str) -> List[ShotRecord]:
	return _update(shots, shot_id, image_url="")


def attach_video(shots: List[ShotRecord], shot_id: str, url: str) -> List[ShotRecord]:
	return _update(shots, shot_id, video_url=url)


def remove_video(shots: List[ShotRecord], shot_id: str) -> List[ShotRecord]:
	return _update(shots, shot_id, video_url="")


def set_video_prompt(shots: List[ShotRecord], shot_id: str, prompt: str) -> List[ShotRecord]:
	return _update(shots, shot_id, video_prompt=prompt)


def collect_full_script(shots: List[ShotRecord], sep: str = "\n") -> str:
	"""
	按列表顺序拼接各镜头文案，交给 TTS。
	封面没有口播，空文案也跳过。
	"""
	return sep.join(s.script for s in shots if not s.is_cover and s.script.strip())
