"""Configuration helpers for environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


def _getenv_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _getenv_int(name: str, default: int) -> int:
    v = (os.getenv(name) or "").strip()
    if not v:
        return default
    try:
        return int(v)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {v!r}") from exc


@dataclass(frozen=True)
class Config:
    # All fields are passed explicitly by Config.load(), so we don’t put per-field defaults here.
    log_level: str

    min_length: int
    max_length: int
    min_interval_ms: int
    max_interval_ms: int
    stop_timeout_ms: int

    file_writer: bool
    output_dir: str

    syslog: bool
    syslog_host: str
    syslog_port: int
    syslog_hostname: str

    webhook_url: Optional[str]

    http_api: bool
    http_host: str
    http_port: int

    @staticmethod
    def load() -> "Config":
        """Build a Config from environment."""
        log_level        = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()

        min_length       = _getenv_int("MIN_LENGTH", 8)
        max_length       = _getenv_int("MAX_LENGTH", 16)
        min_interval_ms  = _getenv_int("MIN_INTERVAL_MS", 1000)
        max_interval_ms  = _getenv_int("MAX_INTERVAL_MS", 5000)
        stop_timeout_ms  = _getenv_int("STOP_TIMEOUT_MS", 1000)

        file_writer      = _getenv_bool("FILE_WRITER", True)
        output_dir       = os.getenv("OUTPUT_DIR", "/tmp/randpub")

        syslog           = _getenv_bool("SYSLOG", True)
        syslog_host      = os.getenv("SYSLOG_HOST", "localhost")
        syslog_port      = _getenv_int("SYSLOG_PORT", 514)
        syslog_hostname  = os.getenv("SYSLOG_HOSTNAME", "randpub")

        webhook_url      = (os.getenv("WEBHOOK_URL") or "").strip() or None

        http_api         = _getenv_bool("HTTP_API", True)
        http_host        = os.getenv("HTTP_HOST", "0.0.0.0")
        http_port        = _getenv_int("PORT", 8000)

        return Config(
            log_level=log_level,
            min_length=min_length,
            max_length=max_length,
            min_interval_ms=min_interval_ms,
            max_interval_ms=max_interval_ms,
            stop_timeout_ms=stop_timeout_ms,
            file_writer=file_writer,
            output_dir=output_dir,
            syslog=syslog,
            syslog_host=syslog_host,
            syslog_port=syslog_port,
            syslog_hostname=syslog_hostname,
            webhook_url=webhook_url,
            http_api=http_api,
            http_host=http_host,
            http_port=http_port,
        )

    def producer_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for RandomStringProducer (intervals in seconds)."""
        return {
            "min_length": self.min_length,
            "max_length": self.max_length,
            "min_interval": self.min_interval_ms / 1000.0,
            "max_interval": self.max_interval_ms / 1000.0,
            "stop_timeout": self.stop_timeout_ms / 1000.0,
        }
