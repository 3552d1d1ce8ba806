# -*- coding: utf-8 -*-
"""
core/merge.py

这个文件做什么：
- 把“新解析出来的分镜列表”合并到“当前持有的分镜列表”上。
- 内容和顺序以新列表为准；id 与已挂载的图片/视频以旧列表为准。
- 纯函数：不修改任何入参，总是返回新列表。

匹配规则：
- 只按 shot_number 相等匹配，取旧列表里第一个同号镜头。
- 如果 LLM 重新编号（中间插了一镜），旧 2 号镜头的媒体会跟着“2 号”走到新内容上。
  这是已知取舍，不要改成按内容相似度匹配。
"""

from __future__ import annotations

from typing import Dict, List

from script2board.core.extract import parse_storyboard
from script2board.core.schemas import ShotRecord


def _first_by_number(existing: List[ShotRecord]) -> Dict[int, ShotRecord]:
	index: Dict[int, ShotRecord] = {}
	for s in existing:
		# 重复镜号只认第一个
		index.setdefault(s.shot_number, s)
	return index


def merge_shots(incoming: List[ShotRecord], existing: List[ShotRecord]) -> List[ShotRecord]:
	"""
	incoming：新解析结果（新 id，媒体为空）
	existing：当前分镜列表
	"""
	index = _first_by_number(existing)

	merged: List[ShotRecord] = []
	for s in incoming:
		old = index.get(s.shot_number)
		if old is None:
			merged.append(ShotRecord(
				id=s.id,
				shot_number=s.shot_number,
				script=s.script,
				image_prompt=s.image_prompt,
				image_url=s.image_url,
				video_prompt=s.video_prompt,
				video_url=s.video_url,
			))
			continue

		merged.append(ShotRecord(
			id=old.id,
			shot_number=s.shot_number,
			script=s.script,
			image_prompt=s.image_prompt,
			# 解析结果永远不带媒体，非空的旧 url 不能被空串覆盖
			image_url=old.image_url or s.image_url,
			video_prompt=s.video_prompt,
			video_url=old.video_url or s.video_url,
		))

	return merged


def parse_and_merge(text: str, existing: List[ShotRecord]) -> List[ShotRecord]:
	"""
	解析 + 合并，总是成对调用。
	结果为空时由调用方决定要不要应用（SyncController 会跳过）。
	"""
	return merge_shots(parse_storyboard(text), existing)
