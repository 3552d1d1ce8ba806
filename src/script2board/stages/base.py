# -*- coding: utf-8 -*-
"""
script2board/stages/base.py

目的：
- 定义 Stage 的“接口形状”和运行上下文 StageContext。
- 让每个阶段都遵循同一种调用方式：run(paths, ctx)。

为什么需要：
- pipeline/orchestrator 只负责按顺序调度 stage，
  它不应该知道 stage 的内部细节。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from script2board.core.io import TaskPaths


@dataclass
class StageContext:
	"""
	运行上下文：
	- idea：第一步（创意构思）的用户输入；为空时沿用任务里已保存的 input
	- model：本次运行用的模型；为空时用 .env / 环境变量里的 SCRIPT2BOARD_MODEL
	- llm_client：显式注入的 client（测试用假 client）；为空时从 .env 加载
	- project_root：查找 .env 的目录
	"""
	idea: str = ""
	model: str = ""
	llm_client: Optional[Any] = None
	project_root: Optional[str] = None


class Stage(Protocol):
	"""
	Stage 接口（协议）：
	- name：阶段名
	- run：执行该阶段，负责读写 TaskPack 内的文件
	"""
	name: str

	def run(self, paths: TaskPaths, ctx: StageContext) -> None:
		...
