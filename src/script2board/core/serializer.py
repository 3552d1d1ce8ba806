# -*- coding: utf-8 -*-
"""
core/serializer.py

这个文件做什么：
- 把分镜列表（可选再加完整口播文稿）写回标准 Markdown 表格。
- 用于原文模式展示和导出；格式必须能被 table_parser 原样读回。

注意：
- 媒体 url 不进文本，只活在结构化数据里。
- 行顺序就是列表顺序，调用方自己保证排好序。
"""

from __future__ import annotations

from typing import List

from script2board.core.schemas import ShotRecord


FULL_SCRIPT_HEADING = "### 1. 完整口播文稿"
TABLE_HEADING = "### 2. 视觉分镜表"
TABLE_HEADER = "| 镜号 | 脚本文案 | 画面生成提示词 (Image Prompt) | 视频生成提示词 (Video Prompt) |"
TABLE_SEPARATOR = "|------|----------|-------------------------------|------------------------------|"


def _cell(value: str) -> str:
	# 单元格里的竖线/换行会把一行拆坏，换成全角竖线和空格
	return value.replace("\r", " ").replace("\n", " ").replace("|", "｜").strip()


def stringify_storyboard_table(items: List[ShotRecord], full_script: str = "") -> str:
	parts: List[str] = []

	if full_script and full_script.strip():
		# 口播文稿里的竖线会被表格解析器当成数据行
		narration = full_script.strip().replace("|", "｜")
		parts.append(f"{FULL_SCRIPT_HEADING}\n\n{narration}\n\n")

	parts.append(f"{TABLE_HEADING}\n\n")
	parts.append(TABLE_HEADER + "\n")
	parts.append(TABLE_SEPARATOR + "\n")

	for s in items:
		video_prompt = _cell(s.video_prompt) or "-"
		parts.append(
			f"| {s.shot_number} | {_cell(s.script)} | {_cell(s.image_prompt)} | {video_prompt} |\n"
		)

	return "".join(parts)
