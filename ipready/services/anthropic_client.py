import httpx
from typing import Optional, Protocol, List, Dict
from loguru import logger
from ipready.core.config import settings
from ipready.core.errors import ModelUnavailableError

class CompletionModel(Protocol):
    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str: ...

def first_text_block(content: List[Dict]) -> str:
    """Text of the first text-bearing content block, or an empty string"""
    for block in content or []:
        if block.get("type") == "text" and block.get("text") is not None:
            return block["text"]
    return ""

class AnthropicClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.ANTHROPIC_API_KEY
        self.model = model or settings.LLM_MODEL
        self.base_url = (base_url or settings.ANTHROPIC_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": settings.ANTHROPIC_VERSION,
            "content-type": "application/json"
        }

    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        """Run one Messages API completion and return its text"""
        payload = {
            "model": self.model,
            "max_tokens": max_tokens,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_prompt}]
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/messages",
                    headers=self._headers(),
                    json=payload
                )
        except httpx.HTTPError as e:
            logger.error(f"Anthropic request error: {e!r}")
            raise ModelUnavailableError(f"model request failed: {type(e).__name__}") from e

        if response.status_code != 200:
            logger.warning(f"Anthropic request failed: {response.status_code} {response.text[:200]}")
            raise ModelUnavailableError(f"model provider returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ModelUnavailableError("model provider returned a non-JSON body") from e

        text = first_text_block(data.get("content", []))
        usage = data.get("usage", {})
        logger.info(
            f"Anthropic completion: model={data.get('model', self.model)} "
            f"in={usage.get('input_tokens')} out={usage.get('output_tokens')} chars={len(text)}"
        )
        return text
