from .base import LLMClient

__all__ = ["LLMClient"]
