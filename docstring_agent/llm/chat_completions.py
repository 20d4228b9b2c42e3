import json
import logging
from typing import Optional

import requests

from ..errors import GenerationError
from .base import LLMClient

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a documentation expert. Generate clear, concise docstrings "
    "following Microsoft's style guidelines."
)


class ChatCompletionsClient(LLMClient):
    """OpenAI-compatible ``/chat/completions`` endpoint (LM Studio, OpenAI)."""

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = 500,
        timeout: float = 60.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    def _url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _payload(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def generate_response(self, prompt: str) -> str:
        est_tokens = int(len(prompt.split()) * 1.3)
        logger.debug(f"[LLM] Sending ~{est_tokens} tokens to {self.model}")

        url = self._url()
        try:
            response = requests.post(
                url, headers=self._headers(), json=self._payload(prompt), timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            response_text = data["choices"][0]["message"]["content"] or ""
        except requests.exceptions.RequestException as e:
            logger.error(f"[LLM] Error communicating with {url}: {e}")
            raise GenerationError("Chat completion request failed", {"url": url}) from e
        except (KeyError, IndexError, TypeError, json.JSONDecodeError) as e:
            logger.error(f"[LLM] Error parsing response from {url}: {e}")
            raise GenerationError("Malformed chat completion response", {"url": url}) from e

        usage = data.get("usage", {})
        logger.debug(
            f"[LLM] Received: prompt_tokens={usage.get('prompt_tokens', '?')}, "
            f"completion_tokens={usage.get('completion_tokens', '?')}"
        )
        return response_text


class AzureOpenAIClient(ChatCompletionsClient):
    """Azure OpenAI deployment; authenticates with the ``api-key`` header."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        deployment: str = "gpt-4",
        api_version: str = "2023-05-15",
        **kwargs,
    ):
        super().__init__(endpoint, model=deployment, api_key=api_key, **kwargs)
        self.deployment = deployment
        self.api_version = api_version

    def _url(self) -> str:
        return (
            f"{self.base_url}/openai/deployments/{self.deployment}"
            f"/chat/completions?api-version={self.api_version}"
        )

    def _headers(self) -> dict:
        return {"Content-Type": "application/json", "api-key": self.api_key or ""}
