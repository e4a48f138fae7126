import logging
from typing import Dict, List

import requests


def mask_key(s: str) -> str:
    if not s:
        return ""
    if len(s) <= 5:
        return "***"
    return s[:3] + "***" + s[-2:]


class OpenAIPromptService:
    """Chat-completions client for an OpenAI-compatible endpoint."""

    def __init__(self, api_key: str, model: str = "gpt-3.5-turbo", api_url: str = "https://api.openai.com/v1/chat/completions", timeout: float = 30.0):
        self.api_key = api_key
        self.model = model or "gpt-3.5-turbo"
        self.api_url = api_url or "https://api.openai.com/v1/chat/completions"
        self.timeout = timeout
        self.logger = logging.getLogger("coach")

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _parse_response(self, payload: Dict) -> str:
        choices = payload.get("choices") or []
        if not choices:
            return ""
        first = choices[0] or {}
        message = first.get("message") or {}
        content = message.get("content")
        if isinstance(content, list):
            texts: List[str] = []
            for part in content:
                if isinstance(part, dict) and part.get("type") in {"text", "output_text"}:
                    txt = part.get("text") or ""
                    if txt:
                        texts.append(str(txt))
            return " ".join(texts)
        if isinstance(content, str):
            return content
        return ""

    def complete(self, system: str, user: str, max_tokens: int = 100) -> str:
        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is not set")
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "max_tokens": max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        resp = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        try:
            resp.raise_for_status()
        except Exception as exc:
            self.logger.error("openai.http_failed status=%s err=%s body=%s", resp.status_code, exc, resp.text[:500])
            raise
        data = resp.json()
        text = self._parse_response(data)
        if not text:
            self.logger.warning("openai.empty_response payload_keys=%s", list(data.keys()))
        return text
