# -*- coding: utf-8 -*-
"""
core/extract.py

这个文件做什么：
- 表格解析器前面的一层“前端”，处理 LLM 的另外两种常见输出：
  1) 完整口播文稿段落（"### 1. 完整口播文稿" 之后的正文）
  2) JSON 格式的分镜（```json 代码块，或者文本里最外层的 {...}）
- parse_storyboard()：先试 JSON，不是 JSON 分镜就交给表格解析器。

原则：
- 和表格解析器一样不抛异常，识别不了就返回空/None。
"""

from __future__ import annotations

import json
import re
from typing import Any, List, Optional

from script2board.core.schemas import ShotRecord, new_shot_id
from script2board.core.table_parser import ensure_cover, parse_storyboard_table


_FULL_SCRIPT_RE = re.compile(
	r"#{0,6}\s*\d*\.?\s*完整口播文稿[^\n]*\n+([\s\S]*?)(?=\n\s*#|\n\s*\||\Z)",
)
_JSON_FENCE_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")


def extract_full_script(text: str) -> str:
	"""
	取“完整口播文稿”标题后的正文，直到下一个标题或表格行。
	没有这一段返回空串。
	"""
	if not text:
		return ""

	m = _FULL_SCRIPT_RE.search(text)
	if m is None:
		return ""

	return m.group(1).strip()


def _json_candidate(text: str) -> Optional[str]:
	m = _JSON_FENCE_RE.search(text)
	if m is not None:
		return m.group(1)

	first = text.find("{")
	last = text.rfind("}")
	if first != -1 and last > first:
		return text[first:last + 1]

	return None


def _json_shot_number(value: Any) -> int:
	# bool 是 int 的子类，这里不认
	if isinstance(value, bool):
		return 0

	if isinstance(value, int):
		return value

	# 2.0 这种整数值的浮点也算
	if isinstance(value, float) and value.is_integer():
		return int(value)

	if isinstance(value, str) and value.strip().isdecimal():
		try:
			return int(value.strip())
		except ValueError:
			return 0

	return 0


def _json_text(value: Any) -> str:
	if value is None:
		return ""
	return str(value)


def parse_storyboard_json(text: str) -> Optional[List[ShotRecord]]:
	"""
	识别 {"storyboard": [...]} 形状的 JSON 分镜。
	不是这种形状（或者根本不是 JSON）返回 None，让调用方走表格解析。
	"""
	if not text:
		return None

	candidate = _json_candidate(text)
	if candidate is None:
		return None

	try:
		data = json.loads(candidate)
	except ValueError:
		return None

	if not isinstance(data, dict) or not isinstance(data.get("storyboard"), list):
		return None

	items: List[ShotRecord] = []
	for row in data["storyboard"]:
		if not isinstance(row, dict):
			continue

		items.append(ShotRecord(
			id=new_shot_id(),
			shot_number=_json_shot_number(row.get("shot_number")),
			script=_json_text(row.get("script")),
			image_prompt=_json_text(row.get("image_prompt")),
			video_prompt=_json_text(row.get("video_prompt")),
		))

	return ensure_cover(items)


def parse_storyboard(text: str) -> List[ShotRecord]:
	"""
	LLM 输出 -> 分镜列表。JSON 分镜优先，其余一律按 Markdown 表格规则解析。
	"""
	items = parse_storyboard_json(text)
	if items is not None:
		return items

	return parse_storyboard_table(text)
