# -*- coding: utf-8 -*-
"""
core/sync.py

这个文件做什么：
- 在三个更新来源之间做仲裁：
  1) 外部送来的生成文本（LLM 流式/完成输出）
  2) 用户在原文模式下改的文本
  3) 当前持有的分镜列表
- 决定每次更新是“解析 + 合并”还是直接跳过，避免重复解析和
  结构化编辑 <-> 原文 之间来回触发。

状态只有两个标记（一次编辑会话内有效）：
- last_parsed_text：最近一次已经解析并应用的文本
- last_external_text：最近一次从生成端收到的文本

分镜列表不归这里管：每次按值传入，按值返回（SyncResult.shots），
由调用方（任务存储）决定是否提交。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from script2board.core.merge import parse_and_merge
from script2board.core.schemas import ShotRecord


# 永远不会和任何字符串相等，用来强制下一次重新解析
_NEVER_MATCHES = object()


@dataclass
class SyncResult:
	"""
	shots：调用方应当持有的分镜列表；applied=False 时就是传入的那个对象本身。
	reason：applied / same_external / already_parsed / empty_parse / already_loaded / has_shots
	"""
	shots: List[ShotRecord]
	applied: bool
	reason: str


class SyncController:
	def __init__(self) -> None:
		self.last_parsed_text: object = None
		self.last_external_text: Optional[str] = None
		self._loaded = False

	def _apply(self, text: str, shots: List[ShotRecord]) -> SyncResult:
		merged = parse_and_merge(text, shots)

		# 解析出 0 条时不覆盖已有分镜：一次坏输出不能把之前的工作清空
		if not merged:
			return SyncResult(shots=shots, applied=False, reason="empty_parse")

		return SyncResult(shots=merged, applied=True, reason="applied")

	def on_external_text(self, text: str, shots: List[ShotRecord]) -> SyncResult:
		"""
		生成端送来新文本。相同文本重复送达（例如界面重绘）只处理一次。
		"""
		if text == self.last_external_text:
			return SyncResult(shots=shots, applied=False, reason="same_external")

		self.last_external_text = text

		if text == self.last_parsed_text:
			return SyncResult(shots=shots, applied=False, reason="already_parsed")

		result = self._apply(text, shots)
		if result.applied:
			self.last_parsed_text = text

		return result

	def on_user_raw_text_change(self, text: str, shots: List[ShotRecord]) -> SyncResult:
		"""
		用户在原文模式里改了文本：每次改动都重新解析。
		"""
		self.last_parsed_text = _NEVER_MATCHES
		return self._apply(text, shots)

	def on_initial_load(self, text: str, shots: List[ShotRecord]) -> SyncResult:
		"""
		会话开始时调用一次。
		- 已有分镜：不解析，只记下这段文本已经对应当前分镜，防止之后同样的文本再覆盖结构化编辑
		- 没有分镜但有文本：解析一次作为初始分镜
		"""
		if self._loaded:
			return SyncResult(shots=shots, applied=False, reason="already_loaded")

		self._loaded = True

		if not text:
			return SyncResult(shots=shots, applied=False, reason="empty_parse")

		if shots:
			self.last_parsed_text = text
			return SyncResult(shots=shots, applied=False, reason="has_shots")

		result = self._apply(text, shots)
		if result.applied:
			self.last_parsed_text = text

		return result
