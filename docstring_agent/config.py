import os

from .errors import ConfigurationError


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/api/generate")
    LM_STUDIO_BASE_URL = os.getenv("LM_STUDIO_BASE_URL", "http://localhost:1234/v1")
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
    AZURE_OPENAI_ENDPOINT = os.getenv("AZURE_OPENAI_ENDPOINT", "")
    AZURE_OPENAI_API_KEY = os.getenv("AZURE_OPENAI_API_KEY", "")
    AZURE_OPENAI_DEPLOYMENT = os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4")
    AZURE_OPENAI_API_VERSION = os.getenv("AZURE_OPENAI_API_VERSION", "2023-05-15")
    DEFAULT_MODEL = os.getenv("DEFAULT_MODEL", "gpt-4")
    DEFAULT_PROVIDER = os.getenv("DOCSTRING_PROVIDER", "offline")
    REQUEST_DELAY = float(os.getenv("DOCSTRING_REQUEST_DELAY", "0.5"))
    TRACK_LITERALS = _env_flag("DOCSTRING_TRACK_LITERALS")

    PROVIDERS = ("offline", "ollama", "lm_studio", "azure")

    @classmethod
    def validate_provider(cls, provider: str) -> None:
        """Raise ConfigurationError when *provider* cannot be used as configured."""
        if provider not in cls.PROVIDERS:
            raise ConfigurationError(
                f"Unknown provider: {provider}",
                {"choices": "|".join(cls.PROVIDERS)},
            )
        if provider == "azure":
            missing = [
                name for name, value in (
                    ("AZURE_OPENAI_ENDPOINT", cls.AZURE_OPENAI_ENDPOINT),
                    ("AZURE_OPENAI_API_KEY", cls.AZURE_OPENAI_API_KEY),
                )
                if not value
            ]
            if missing:
                raise ConfigurationError(
                    "Azure OpenAI is not configured",
                    {"missing": ",".join(missing)},
                )
