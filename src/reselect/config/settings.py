from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reselect.errors import ConfigurationError


WaitState = Literal["attached", "detached", "visible", "hidden"]


class ReselectSettings(BaseSettings):
    """Configuration centralisee du compilateur d'arbre."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # === Debug ===
    debug_timeout_ms: float = Field(
        default=5000,
        alias="RESELECT_DEBUG_TIMEOUT_MS",
        description="Attente maximale (ms) avant capture par debug().",
    )
    debug_wait_state: WaitState = Field(default="visible", alias="RESELECT_DEBUG_WAIT_STATE")

    # === Assertions ===
    # None = timeout par défaut de la librairie d'assertions
    assertion_timeout_ms: Optional[float] = Field(default=None, alias="RESELECT_ASSERTION_TIMEOUT_MS")

    # === Résolution ===
    root_selector: str = Field(default=":root", alias="RESELECT_ROOT_SELECTOR")
    strict_aliases: bool = Field(
        default=False,
        alias="RESELECT_STRICT_ALIASES",
        description="Unicité des alias sur tout l'arbre, pas seulement par scope.",
    )

    # === Logging ===
    inspect_log_level: str = Field(default="INFO", alias="RESELECT_INSPECT_LOG_LEVEL")
    log_console: bool = Field(default=False, alias="RESELECT_LOG_CONSOLE")
    logs_dir: Optional[Path] = Field(default=None, alias="RESELECT_LOGS_DIR")
    log_file: str = Field(default="reselect.log", alias="RESELECT_LOG_FILE")

    @field_validator("debug_timeout_ms", "assertion_timeout_ms")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value < 0:
            raise ValueError("timeout must be >= 0")
        return value

    @field_validator("inspect_log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> ReselectSettings:
    """
    Settings depuis l'environnement (RESELECT_*) et .env, mis en cache.

    Raises:
        ConfigurationError: variable RESELECT_* invalide
    """
    try:
        return ReselectSettings()  # type: ignore[call-arg]
    except ValidationError as e:
        raise ConfigurationError(f"invalid RESELECT_* configuration: {e}") from e
