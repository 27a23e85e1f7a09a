# academy/services/ai/llm.py
import logging
from typing import List, Dict, Optional

import httpx

from academy.core.config import settings
from academy.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class OllamaClient:
    def __init__(self, base_url: Optional[str] = None, model: Optional[str] = None, timeout: Optional[float] = None):
        self.base = (base_url or settings.OLLAMA_BASE_URL).rstrip("/")
        self.model = model or settings.OLLAMA_MODEL
        self.client = httpx.AsyncClient(base_url=self.base, timeout=timeout or settings.OLLAMA_TIMEOUT)

    async def generate(self, system_prompt: str, messages: List[Dict[str, str]], json_mode: bool = False) -> str:
        """
        Uses Ollama native chat endpoint: POST /api/chat
        Payload shape:
          { "model": "...", "messages": [{"role":"system","content":"..."}, ...], "stream": false, "format": "json" }
        Response shape:
          { "message": {"role":"assistant","content":"..."}, ... }
        """
        msgs = []
        if system_prompt:
            msgs.append({"role": "system", "content": system_prompt})
        msgs.extend(messages)

        payload = {"model": self.model, "messages": msgs, "stream": False}
        if json_mode:
            payload["format"] = "json"

        try:
            r = await self.client.post("/api/chat", json=payload)
            r.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("LLM call to %s failed: %s", self.base, e)
            raise UpstreamError(f"Language model unavailable: {e}") from e
        data = r.json()
        return data.get("message", {}).get("content", "")

    async def aclose(self):
        await self.client.aclose()


# FastAPI dependency
async def get_llm():
    client = OllamaClient()
    try:
        yield client
    finally:
        await client.aclose()
