from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .sequence import DEFAULT_BLOCK_SIZE

ANOMALY_POLICIES = ("ignore", "warn", "error")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_CHUNK_SIZE = 1024


@dataclass(frozen=True)
class Settings:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    block_size: int = DEFAULT_BLOCK_SIZE
    anomaly_policy: str = "ignore"
    encoding: str = "utf-8"
    verbose: bool = False
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.block_size < 1:
            raise ValueError(f"block_size must be >= 1, got {self.block_size}")
        if self.anomaly_policy not in ANOMALY_POLICIES:
            raise ValueError(
                f"anomaly_policy must be one of {', '.join(ANOMALY_POLICIES)}, got {self.anomaly_policy!r}"
            )
        if self.log_level is not None and self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        """
        Defaults overridden by EMITOR_* variables (a .env in the working directory is loaded first).
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        return cls(
            chunk_size=_env_int("EMITOR_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
            block_size=_env_int("EMITOR_BLOCK_SIZE", DEFAULT_BLOCK_SIZE),
            anomaly_policy=os.getenv("EMITOR_ANOMALY_POLICY", "ignore").strip().lower() or "ignore",
            log_level=os.getenv("EMITOR_LOG_LEVEL", "").strip().upper() or None,
        )

    def override(self, **changes) -> "Settings":
        # CLI flags left at None keep the environment value
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
