# -*- coding: utf-8 -*-
"""
providers/llm/openai_client.py

这个文件做什么：
- 提供一个极薄的 OpenAI 兼容 Chat Completions Client，供 skill 层调用。
- 支持从项目根目录的 .env 读取配置，避免在 shell 里 export。
- 对外暴露两个方法：
  chat_text(system_prompt, user_prompt) -> str
  chat_stream(system_prompt, user_prompt) -> Iterator[str]（逐段产出增量文本）

配置来源优先级（从高到低）：
1) 显式传参（model/base_url/api_key）
2) .env 文件
3) 系统环境变量

安全约定：
- .env 必须写进 .gitignore
- 不要把 key 写进任何代码文件
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import httpx
from dotenv import load_dotenv


DEFAULT_BASE_URL = "https://api.lingyaai.cn/v1"
DEFAULT_MODEL = "deepseek-v3.2"


@dataclass
class OpenAIChatConfig:
	api_key: str
	base_url: str
	model: str
	timeout_s: float = 60.0


def _snip(text: str, n: int = 1000) -> str:
	if len(text) > n:
		return text[:n] + "...(truncated)"
	return text


class OpenAIChatClient:
	def __init__(self, cfg: OpenAIChatConfig, transport: Optional[httpx.BaseTransport] = None):
		self.cfg = cfg
		self._client = httpx.Client(
			base_url=cfg.base_url,
			timeout=httpx.Timeout(cfg.timeout_s),
			headers={
				"Authorization": f"Bearer {cfg.api_key}",
				"Content-Type": "application/json",
			},
			transport=transport,
		)

	def close(self) -> None:
		self._client.close()

	def _payload(self, system_prompt: str, user_prompt: str, stream: bool) -> Dict[str, Any]:
		return {
			"model": self.cfg.model,
			"messages": [
				{"role": "system", "content": system_prompt},
				{"role": "user", "content": user_prompt},
			],
			"temperature": 0.7,
			"stream": stream,
		}

	def chat_text(self, system_prompt: str, user_prompt: str) -> str:
		r = self._client.post("/chat/completions", json=self._payload(system_prompt, user_prompt, False))

		if r.status_code < 200 or r.status_code >= 300:
			raise ValueError(f"LLM HTTP {r.status_code}: {_snip(r.text)}")

		data = r.json()

		try:
			return data["choices"][0]["message"]["content"] or ""
		except (KeyError, IndexError, TypeError):
			raise ValueError(f"Unexpected response shape: {_snip(json.dumps(data, ensure_ascii=False))}")

	def chat_stream(self, system_prompt: str, user_prompt: str) -> Iterator[str]:
		"""
		SSE 流：每行 `data: {...}`，以 `data: [DONE]` 结束。
		只产出 delta.content，非内容事件（角色、心跳）跳过。
		"""
		payload = self._payload(system_prompt, user_prompt, True)

		with self._client.stream("POST", "/chat/completions", json=payload) as r:
			if r.status_code < 200 or r.status_code >= 300:
				r.read()
				raise ValueError(f"LLM HTTP {r.status_code}: {_snip(r.text)}")

			for line in r.iter_lines():
				line = line.strip()
				if not line.startswith("data:"):
					continue

				body = line[len("data:"):].strip()
				if body == "[DONE]":
					return

				try:
					event = json.loads(body)
				except ValueError:
					raise ValueError(f"LLM stream event is not valid JSON: {_snip(body)}")

				choices = event.get("choices") or []
				if not choices:
					continue

				delta = choices[0].get("delta") or {}
				content = delta.get("content")
				if content:
					yield content


def _load_dotenv_if_present(project_root: Path) -> None:
	env_path = project_root / ".env"
	if env_path.exists():
		load_dotenv(dotenv_path=str(env_path), override=False)


def load_openai_client(
	project_root: Optional[str] = None,
	api_key: Optional[str] = None,
	base_url: Optional[str] = None,
	model: Optional[str] = None,
	timeout_s: Optional[float] = None,
) -> OpenAIChatClient:
	"""
	加载 client。默认从 project_root/.env 读取（project_root 缺省为当前工作目录）。
	"""
	root = Path(project_root or os.getcwd()).resolve()
	_load_dotenv_if_present(root)

	key = (api_key or os.environ.get("SCRIPT2BOARD_API_KEY", "")).strip()
	if not key:
		raise ValueError("Missing SCRIPT2BOARD_API_KEY (from .env or env)")

	url = (base_url or os.environ.get("SCRIPT2BOARD_BASE_URL", "")).strip() or DEFAULT_BASE_URL
	m = (model or os.environ.get("SCRIPT2BOARD_MODEL", "")).strip() or DEFAULT_MODEL
	t = float(timeout_s or os.environ.get("SCRIPT2BOARD_TIMEOUT_S", "60").strip() or 60)

	cfg = OpenAIChatConfig(api_key=key, base_url=url, model=m, timeout_s=t)
	return OpenAIChatClient(cfg)
