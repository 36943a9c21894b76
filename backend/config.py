import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

PROVIDER_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GOOGLE_API_KEY",
}

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-sonnet-latest",
    "gemini": "gemini-2.0-flash",
}

PROVIDER_NAMES = {
    "openai": "OpenAI",
    "anthropic": "Anthropic",
    "gemini": "Gemini",
}


@dataclass
class Settings:
    """Runtime configuration for the relay service."""

    provider: str = "openai"
    api_key: str | None = None
    model: str = DEFAULT_MODELS["openai"]
    max_tokens: int = 16384
    timeout: float = 120.0
    host: str = "0.0.0.0"
    port: int = 8080
    build_dir: str = "build"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    environment: str = "development"

    @property
    def api_key_env(self) -> str:
        return PROVIDER_KEY_ENV[self.provider]

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAMES[self.provider]


def _split_origins(value: str) -> list[str]:
    origins = [item.strip() for item in value.split(",") if item.strip()]
    return origins or ["*"]


def load_settings() -> Settings:
    """Build :class:`Settings` from the current environment."""

    provider = os.getenv("LLM_PROVIDER", "openai").strip().lower()
    if provider not in PROVIDER_KEY_ENV:
        raise ValueError(
            f"Unsupported LLM_PROVIDER '{provider}'. "
            f"Expected one of: {', '.join(sorted(PROVIDER_KEY_ENV))}"
        )

    api_key = (os.getenv(PROVIDER_KEY_ENV[provider]) or "").strip() or None
    default_max_tokens = 16384 if provider == "openai" else 8192

    return Settings(
        provider=provider,
        api_key=api_key,
        model=os.getenv("LLM_MODEL") or DEFAULT_MODELS[provider],
        max_tokens=int(os.getenv("LLM_MAX_TOKENS", default_max_tokens)),
        timeout=float(os.getenv("LLM_TIMEOUT", "120")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        build_dir=os.getenv("BUILD_DIR", "build"),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        environment=os.getenv("APP_ENV", "development"),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
