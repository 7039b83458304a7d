import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load env vars (if not already loaded)
load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AdvisoryConfig:
    api_key: str = ""
    model: str = "gpt-4.1-mini"
    timeout: float = 10.0
    temperature: float = 0.3
    max_tokens: int = 1200
    enabled: bool = True

    @classmethod
    def from_env(cls) -> "AdvisoryConfig":
        return cls(
            api_key=os.getenv("OPENAI_API_KEY", ""),
            model=os.getenv("ADVISORY_MODEL", cls.model),
            timeout=float(os.getenv("ADVISORY_TIMEOUT", cls.timeout)),
            temperature=float(os.getenv("ADVISORY_TEMPERATURE", cls.temperature)),
            enabled=os.getenv("ADVISORY_ENABLED", "true").strip().lower() in _TRUTHY,
        )
