# -*- coding: utf-8 -*-
"""Core 模块单元测试：解析、序列化、前端提取。"""

from __future__ import annotations

from script2board.core.extract import extract_full_script, parse_storyboard, parse_storyboard_json
from script2board.core.schemas import ShotRecord, new_shot_id
from script2board.core.serializer import stringify_storyboard_table
from script2board.core.table_parser import (
	COVER_SCRIPT,
	parse_shot_number,
	parse_storyboard_table,
	split_cells,
)


TABLE = (
	"### 2. 视觉分镜表\n"
	"\n"
	"| 镜号 | 脚本文案 | 画面生成提示词 (Image Prompt) | 视频生成提示词 (Video Prompt) |\n"
	"|------|----------|------|------|\n"
	"| 0 | [封面] | title frame, city at dawn | - |\n"
	"| 1 | 你有没有想过 | a man looking at the sky | slow push in |\n"
	"| 2 | 答案其实很简单 | close-up of a clock | camera pans left |\n"
)


def _fields(shots):
	return [(s.shot_number, s.script, s.image_prompt, s.video_prompt) for s in shots]


class TestShotRecord:
	def test_ids_are_unique(self):
		ids = {new_shot_id() for _ in range(200)}
		assert len(ids) == 200

	def test_dict_roundtrip_keeps_id_and_media(self):
		s = ShotRecord(id="shot-a", shot_number=2, script="x", image_url="https://x/img.png")
		again = ShotRecord.from_dict(s.to_dict())
		assert again == s

	def test_from_dict_fills_missing_id(self):
		s = ShotRecord.from_dict({"shot_number": 3, "script": "x"})
		assert s.id
		assert s.image_url == ""


class TestTableParser:
	def test_standard_table(self):
		shots = parse_storyboard_table(TABLE)
		assert [s.shot_number for s in shots] == [0, 1, 2]
		assert shots[1].script == "你有没有想过"
		assert shots[1].image_prompt == "a man looking at the sky"
		assert shots[1].video_prompt == "slow push in"
		assert all(s.image_url == "" and s.video_url == "" for s in shots)

	def test_zero_is_not_falsy(self):
		"""首格为 0 必须得到 0 号镜头，不能被兜底成 1。"""
		shots = parse_storyboard_table("| 0 | cover | cover prompt | - |\n| 1 | a | b | c |")
		assert shots[0].shot_number == 0
		assert len(shots) == 2

	def test_cover_synthesized(self):
		shots = parse_storyboard_table("| 1 | hello | a prompt | - |")
		assert len(shots) == 2
		assert shots[0].shot_number == 0
		assert shots[0].script == COVER_SCRIPT
		assert shots[0].video_prompt == "-"
		assert shots[0].image_prompt
		assert shots[1].shot_number == 1
		assert shots[1].script == "hello"

	def test_plain_lines_fallback(self):
		shots = parse_storyboard_table("intro\nmiddle\n\nend\n")
		assert len(shots) == 4
		assert shots[0].shot_number == 0
		assert [s.shot_number for s in shots[1:]] == [1, 2, 3]
		assert [s.script for s in shots[1:]] == ["intro", "middle", "end"]
		assert all(s.image_prompt == "" and s.video_prompt == "" for s in shots[1:])

	def test_empty_input(self):
		assert parse_storyboard_table("") == []
		assert parse_storyboard_table("   \n\t\n  ") == []

	def test_malformed_table(self):
		text = (
			"| 镜号 | 脚本 | 画面 | 视频 |\n"
			"|---|---|---|---|\n"
			"| 1 | 有效行 | prompt | - |\n"
			"| 只有一格 |\n"
		)
		shots = parse_storyboard_table(text)
		assert len(shots) == 2
		assert shots[0].shot_number == 0
		assert shots[1].script == "有效行"

	def test_missing_outer_pipes_and_prose(self):
		text = (
			"好的，下面是分镜：\n"
			"镜号 | 脚本 | 画面\n"
			"--- | --- | ---\n"
			"1 | 第一句 | prompt one\n"
			"2 | 第二句 | prompt two\n"
			"希望对你有帮助！\n"
		)
		shots = parse_storyboard_table(text)
		assert [s.shot_number for s in shots] == [0, 1, 2]
		assert shots[2].script == "第二句"
		assert shots[2].video_prompt == ""

	def test_no_digit_first_cell_uses_position(self):
		shots = parse_storyboard_table("| 0 | 封面 | p | - |\n| 开场 | 第一句 | p1 | - |\n| 结尾 | 第二句 | p2 | - |")
		# 兜底编号 = 当前已解析条数 + 1
		assert [s.shot_number for s in shots] == [0, 2, 3]

	def test_digits_are_extracted_from_first_cell(self):
		shots = parse_storyboard_table("| 镜头 3 | 文案 | p | - |\n| #12 | 文案 | p | - |")
		assert [s.shot_number for s in shots] == [0, 3, 12]

	def test_data_row_mentioning_shot_is_not_header(self):
		shots = parse_storyboard_table("| 1 | Shot of a city | wide shot | - |")
		assert shots[1].script == "Shot of a city"

	def test_duplicate_numbers_are_kept(self):
		shots = parse_storyboard_table("| 0 | c | p | - |\n| 1 | a | p | - |\n| 1 | b | p | - |")
		assert [s.shot_number for s in shots] == [0, 1, 1]

	def test_split_cells(self):
		assert split_cells("| a | b |") == ["a", "b"]
		assert split_cells("a | b") == ["a", "b"]
		assert split_cells("| a | | c |") == ["a", "", "c"]

	def test_parse_shot_number(self):
		assert parse_shot_number("0") == 0
		assert parse_shot_number("07") == 7
		assert parse_shot_number("封面") is None

	def test_overlong_number_uses_position(self):
		# 超过整数转换上限的数字串不抛异常，按位置编号
		assert parse_shot_number("9" * 5000) is None
		shots = parse_storyboard_table("| " + "9" * 5000 + " | a | b | - |")
		assert [s.shot_number for s in shots] == [0, 1]
		assert shots[1].script == "a"

	def test_alternate_header_wording(self):
		for header in ("| # | Script | Image | Video |", "| SHOT | 文案 | 画面 | 视频 |", "| 序号 | 文案 | 画面 | 视频 |"):
			shots = parse_storyboard_table(header + "\n|---|---|---|---|\n| 1 | a | p | - |")
			assert [s.shot_number for s in shots] == [0, 1]
			assert shots[1].script == "a"


class TestSerializer:
	def test_roundtrip(self):
		shots = [
			ShotRecord(id=new_shot_id(), shot_number=0, script="[封面]", image_prompt="cover", video_prompt="-"),
			ShotRecord(id=new_shot_id(), shot_number=1, script="第一句", image_prompt="p1", video_prompt="push in"),
			ShotRecord(id=new_shot_id(), shot_number=2, script="第二句", image_prompt="p2", video_prompt="pan left",
				image_url="https://x/img.png"),
		]
		text = stringify_storyboard_table(shots, "完整的口播文稿。")
		again = parse_storyboard_table(text)
		assert _fields(again) == _fields(shots)
		# 媒体不进文本
		assert "https://x/img.png" not in text

	def test_header_and_dash_for_empty_video(self):
		shots = [ShotRecord(id="a", shot_number=1, script="s", image_prompt="p")]
		text = stringify_storyboard_table(shots)
		lines = text.splitlines()
		assert "完整口播文稿" not in text
		assert any("镜号" in line and line.count("|") == 5 for line in lines)
		assert lines[-1] == "| 1 | s | p | - |"

	def test_narration_section(self):
		text = stringify_storyboard_table([], "  一段口播。  ")
		assert text.startswith("### 1. 完整口播文稿\n\n一段口播。\n\n")
		assert extract_full_script(text) == "一段口播。"

	def test_pipes_in_cells_do_not_break_rows(self):
		shots = [ShotRecord(id="a", shot_number=1, script="左|右", image_prompt="p\nq")]
		again = parse_storyboard_table(stringify_storyboard_table(shots, "含有 | 竖线的口播"))
		assert [s.shot_number for s in again] == [0, 1]
		assert again[1].script == "左｜右"
		assert again[1].image_prompt == "p q"


class TestExtract:
	def test_full_script_until_table(self):
		text = "### 1. 完整口播文稿\n\n第一段。\n\n第二段。\n\n" + TABLE
		assert extract_full_script(text) == "第一段。\n\n第二段。"

	def test_full_script_missing(self):
		assert extract_full_script(TABLE) == ""
		assert extract_full_script("") == ""

	def test_json_storyboard_in_fence(self):
		text = (
			"下面是结果：\n```json\n"
			'{"full_script": "x", "storyboard": ['
			'{"shot_number": 0, "script": "[封面]", "image_prompt": "cover", "video_prompt": "-"},'
			'{"shot_number": "2", "script": "b", "image_prompt": "p"}'
			"]}\n```\n"
		)
		shots = parse_storyboard_json(text)
		assert [s.shot_number for s in shots] == [0, 2]
		assert shots[1].video_prompt == ""

	def test_json_without_cover_gets_one(self):
		shots = parse_storyboard('{"storyboard": [{"shot_number": 1, "script": "a"}]}')
		assert [s.shot_number for s in shots] == [0, 1]

	def test_not_json_falls_back_to_table(self):
		assert parse_storyboard_json(TABLE) is None
		assert parse_storyboard_json("风格 {style} 待定") is None
		assert _fields(parse_storyboard(TABLE)) == _fields(parse_storyboard_table(TABLE))

	def test_json_unicode_digit_string_does_not_raise(self):
		shots = parse_storyboard('{"storyboard": [{"shot_number": "²", "script": "a"}]}')
		assert [s.shot_number for s in shots] == [0]
		assert shots[0].script == "a"

	def test_json_whole_number_float(self):
		shots = parse_storyboard_json('{"storyboard": [{"shot_number": 0}, {"shot_number": 2.0, "script": "b"}, {"shot_number": 2.5}]}')
		assert [s.shot_number for s in shots] == [0, 2, 0]
