from __future__ import annotations

import logging
import os
from typing import Mapping

from dotenv import load_dotenv

from fuzztester.http_client import HttpTransport, SimulatedTransport

TRANSPORTS = ("simulated", "http")


class Settings:
    def __init__(
        self,
        transport: str = "simulated",
        simulated_delay_ms: int = 1500,
        timeout_ms: int = 20000,
        toast_duration_ms: int = 4000,
        log_level: str = "INFO",
    ) -> None:
        if transport not in TRANSPORTS:
            raise ValueError(f"unsupported transport: {transport}")
        self.transport = transport
        self.simulated_delay_ms = simulated_delay_ms
        self.timeout_ms = timeout_ms
        self.toast_duration_ms = toast_duration_ms
        self.log_level = log_level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls(
            transport=environ.get("FUZZTESTER_TRANSPORT", "simulated").strip().lower(),
            simulated_delay_ms=_int_setting(environ, "FUZZTESTER_SIMULATED_DELAY_MS", 1500),
            timeout_ms=_int_setting(environ, "FUZZTESTER_TIMEOUT_MS", 20000),
            toast_duration_ms=_int_setting(environ, "FUZZTESTER_TOAST_DURATION_MS", 4000),
            log_level=environ.get("FUZZTESTER_LOG_LEVEL", "INFO").strip().upper(),
        )


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def build_transport(settings: Settings):
    if settings.transport == "http":
        timeout = settings.timeout_ms / 1000 if settings.timeout_ms > 0 else None
        return HttpTransport(timeout=timeout)
    return SimulatedTransport(delay_ms=settings.simulated_delay_ms)


def configure_logging(level: str | int = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
