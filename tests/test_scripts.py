# -*- coding: utf-8 -*-
"""Scripts 集成测试。"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path


def test_debug_parse_storyboard(tmp_path: Path):
	"""debug_parse_storyboard 能解析一份缺封面的分镜表并通过回写校验。"""
	in_file = tmp_path / "storyboard.md"
	in_file.write_text(
		"### 1. 完整口播文稿\n\n一段口播。\n\n"
		"| 镜号 | 脚本 | 画面 | 视频 |\n|---|---|---|---|\n"
		"| 1 | 第一句 | p1 | push in |\n| 2 | 第二句 | p2 | - |\n",
		encoding="utf-8",
	)

	root = Path(__file__).resolve().parent.parent
	env = dict(os.environ)
	env["PYTHONPATH"] = str(root / "src") + os.pathsep + env.get("PYTHONPATH", "")

	result = subprocess.run(
		[sys.executable, "scripts/debug_parse_storyboard.py", "--in_path", str(in_file)],
		cwd=root,
		capture_output=True,
		text=True,
		encoding="utf-8",
		env=env,
	)
	assert result.returncode == 0, result.stderr
	assert "[parse] shots=3 cover_synthesized=True" in result.stdout
	assert "[parse] full_script_chars=5" in result.stdout
	assert "[roundtrip] same_fields=True" in result.stdout
