# -*- coding: utf-8 -*-
"""
core/table_parser.py

这个文件做什么：
- 把 LLM 生成的 Markdown 文本解析成有序的 ShotRecord 列表。
- 输入不可信：可能夹杂说明文字、标题、缺首尾竖线、表头换了叫法。
- 纯函数，不抛异常；坏行直接跳过或按位置编号兜底。

解析策略：
1) 去掉空行
2) 只要有一行含两个及以上 '|'，就按表格解析；否则每行当作一个镜头的文案
3) 表格模式：跳过表头行与分隔行，按 '|' 切单元格，至少 2 格才算数据行
4) 镜号取首格里的数字；取不到数字才用“当前条数 + 1”兜底（0 是合法镜号，不能当成失败）
5) 结果非空且没有 0 号镜头时，在最前面补一个封面
"""

from __future__ import annotations

import re
from typing import List, Optional

from script2board.core.schemas import COVER_SHOT_NUMBER, ShotRecord, new_shot_id


HEADER_KEYWORDS = ("镜号", "Shot")
# 表头首格的其它常见写法，比较时忽略大小写
HEADER_FIRST_CELLS = ("#", "no", "no.", "shot", "shot #", "shot no.", "镜号", "序号", "编号")

MAX_SHOT_NUMBER_DIGITS = 4300

COVER_SCRIPT = "[封面]"
COVER_IMAGE_PROMPT = "Cinematic cover image for this video, dramatic lighting, high quality"
COVER_VIDEO_PROMPT = "-"

_SEPARATOR_LINE_RE = re.compile(r"^[\s|:-]+$")
_SEPARATOR_CELL_RE = re.compile(r"^[-:]+$")
_LEADING_NUMBER_RE = re.compile(r"^\s*\|?\s*\d+")
_NON_DIGIT_RE = re.compile(r"[^0-9]")


def _is_header(line: str) -> bool:
	if not any(k in line for k in HEADER_KEYWORDS) and not _has_header_first_cell(line):
		return False
	# “| 1 | Shot of a city |” 这种是数据行，不是表头
	return _LEADING_NUMBER_RE.match(line) is None


def _has_header_first_cell(line: str) -> bool:
	cells = split_cells(line)
	return bool(cells) and cells[0].lower() in HEADER_FIRST_CELLS


def _is_separator_line(line: str) -> bool:
	return _SEPARATOR_LINE_RE.match(line) is not None


def split_cells(line: str) -> List[str]:
	"""
	按 '|' 切单元格并 trim。

	- 首格为空且总格数 > 2：是前导竖线产生的，丢掉（格数很少时保留，避免把短行切没）
	- 末格为空：是尾随竖线产生的，丢掉
	"""
	cells = [c.strip() for c in line.split("|")]
	n = len(cells)

	out = []
	for i, c in enumerate(cells):
		if i == 0 and c == "" and n > 2:
			continue
		if i == n - 1 and c == "":
			continue
		out.append(c)

	return out


def parse_shot_number(cell: str) -> Optional[int]:
	"""
	取单元格里的所有数字拼成镜号。
	没有数字返回 None（调用方兜底）；"0" 返回 0，不是失败。
	"""
	digits = _NON_DIGIT_RE.sub("", cell)
	if not digits:
		return None

	# 超长数字串（解释器默认的整数转换上限是 4300 位）按没有镜号处理
	if len(digits) > MAX_SHOT_NUMBER_DIGITS:
		return None
	return int(digits)


def make_cover() -> ShotRecord:
	return ShotRecord(
		id=new_shot_id(),
		shot_number=COVER_SHOT_NUMBER,
		script=COVER_SCRIPT,
		image_prompt=COVER_IMAGE_PROMPT,
		video_prompt=COVER_VIDEO_PROMPT,
	)


def ensure_cover(items: List[ShotRecord]) -> List[ShotRecord]:
	"""
	非空且缺 0 号镜头时，在最前面补封面；空列表原样返回。
	"""
	if not items:
		return items

	if any(s.shot_number == COVER_SHOT_NUMBER for s in items):
		return items

	return [make_cover()] + items


def _parse_table_lines(lines: List[str]) -> List[ShotRecord]:
	items: List[ShotRecord] = []

	for line in lines:
		if _is_header(line):
			continue
		if _is_separator_line(line):
			continue

		cells = split_cells(line)

		if cells and all(_SEPARATOR_CELL_RE.match(c) for c in cells):
			continue

		if len(cells) < 2:
			continue

		shot_number = parse_shot_number(cells[0])
		if shot_number is None:
			shot_number = len(items) + 1

		items.append(ShotRecord(
			id=new_shot_id(),
			shot_number=shot_number,
			script=cells[1],
			image_prompt=cells[2] if len(cells) > 2 else "",
			video_prompt=cells[3] if len(cells) > 3 else "",
		))

	return items


def _parse_plain_lines(lines: List[str]) -> List[ShotRecord]:
	# 兜底：不是表格时，每行一个镜头，镜号按行位置从 1 开始
	return [
		ShotRecord(id=new_shot_id(), shot_number=i + 1, script=line.strip())
		for i, line in enumerate(lines)
	]


def has_table(lines: List[str]) -> bool:
	return any(line.count("|") >= 2 for line in lines)


def parse_storyboard_table(text: str) -> List[ShotRecord]:
	"""
	Markdown 文本 -> 分镜列表（新 id，媒体字段全空）。
	空文本或全空白返回 []，且不补封面。
	"""
	if not text:
		return []

	lines = [line for line in text.splitlines() if line.strip()]
	if not lines:
		return []

	if has_table(lines):
		items = _parse_table_lines(lines)
	else:
		items = _parse_plain_lines(lines)

	return ensure_cover(items)
