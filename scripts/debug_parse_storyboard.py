# -*- coding: utf-8 -*-
"""
scripts/debug_parse_storyboard.py

这个脚本做什么：
- 读取一份 LLM 生成的分镜 Markdown（默认 docs/storyboard.md）
- 解析 -> 分镜列表
- 打印：
  1) 解析出的镜头数、是否补了封面
  2) 完整口播文稿的字数
  3) 预览前 N 个镜头（便于肉眼检查解析质量）
  4) 写回 Markdown 再解析一次，检查字段是否一致

使用方式：
   python scripts/debug_parse_storyboard.py --in_path docs/storyboard.md
"""

from __future__ import annotations

import argparse

from script2board.core.extract import extract_full_script, parse_storyboard
from script2board.core.serializer import stringify_storyboard_table
from script2board.core.table_parser import COVER_SCRIPT


def build_argparser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser()
	p.add_argument("--in_path", default="docs/storyboard.md", help="输入 Markdown 路径（UTF-8）")
	p.add_argument("--preview", type=int, default=8, help="预览前 N 个镜头")
	return p


def _fields(shots):
	return [(s.shot_number, s.script, s.image_prompt, s.video_prompt) for s in shots]


def main() -> None:
	args = build_argparser().parse_args()

	with open(args.in_path, "r", encoding="utf-8") as f:
		text = f.read()

	shots = parse_storyboard(text)
	full_script = extract_full_script(text)
	synthesized = bool(shots) and shots[0].script == COVER_SCRIPT

	print(f"[parse] shots={len(shots)} cover_synthesized={synthesized}")
	print(f"[parse] full_script_chars={len(full_script)}")

	print(f"\n--- preview shots (first {args.preview}) ---")
	for s in shots[: args.preview]:
		snip = s.script.replace("\n", " ")
		if len(snip) > 80:
			snip = snip[:80] + "..."
		print(f"{s.shot_number:03d} {snip} | {s.image_prompt[:60]}")

	again = parse_storyboard(stringify_storyboard_table(shots, full_script))
	print(f"\n[roundtrip] same_fields={_fields(again) == _fields(shots)}")


if __name__ == "__main__":
	main()
