"""Configuration helpers for booltmemo."""

from dataclasses import dataclass
import logging
import os

from .janitor import janitor_interval

_LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


@dataclass(frozen=True)
class MemoConfig:
    true_ttl_seconds: float
    false_ttl_seconds: float
    log_level: str = "WARNING"

    @property
    def janitor_interval_seconds(self) -> float:
        return janitor_interval(max(0.0, self.true_ttl_seconds), max(0.0, self.false_ttl_seconds))

    @property
    def logging_level(self) -> int:
        return _LOG_LEVELS[self.log_level]


def _env_seconds(name: str, default: str) -> float:
    raw = (os.getenv(name) or default).strip()
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from exc


def _env_log_level(name: str, default: str) -> str:
    level = (os.getenv(name) or default).strip().upper()
    if level == "WARN":
        level = "WARNING"
    if level not in _LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(_LOG_LEVELS)}, got {level!r}")
    return level


def load_config() -> MemoConfig:
    return MemoConfig(
        true_ttl_seconds=_env_seconds("BOOLTMEMO_TRUE_TTL_SECONDS", "10"),
        false_ttl_seconds=_env_seconds("BOOLTMEMO_FALSE_TTL_SECONDS", "5"),
        log_level=_env_log_level("BOOLTMEMO_LOG_LEVEL", "WARNING"),
    )
