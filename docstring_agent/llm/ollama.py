import logging

import requests

from ..errors import GenerationError
from .base import LLMClient

logger = logging.getLogger(__name__)


class OllamaClient(LLMClient):
    def __init__(self, base_url: str, model: str, timeout: float = 60.0):
        self.base_url = base_url
        self.model = model
        self.timeout = timeout

    def generate_response(self, prompt: str) -> str:
        est_tokens = int(len(prompt.split()) * 1.3)
        logger.debug(f"[Ollama] Sending ~{est_tokens} est. tokens")
        logger.debug(f"[Ollama] Prompt:\n{prompt}")

        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": 0.3},
        }
        try:
            response = requests.post(self.base_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"[Ollama] Connection error: {e}")
            raise GenerationError("Ollama request failed", {"url": self.base_url}) from e
        except ValueError as e:
            raise GenerationError("Ollama returned invalid JSON", {"url": self.base_url}) from e

        result = data.get("response", "")
        logger.debug(
            f"[Ollama] Usage: prompt={data.get('prompt_eval_count', est_tokens)} "
            f"completion={data.get('eval_count', 0)}"
        )
        logger.debug(f"[Ollama] Response:\n{result}")
        return result
