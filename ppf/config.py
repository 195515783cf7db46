"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .address import is_zero_address, to_address

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OracleConfig:
    operator: str = ""
    operator_owner: str = ""


@dataclass(frozen=True)
class SignerConfig:
    private_key: str = ""


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 9100
    url: str = "http://127.0.0.1:9100"
    timeout: int = 10


@dataclass(frozen=True)
class AppConfig:
    oracle: OracleConfig = field(default_factory=OracleConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_oracle(raw: dict[str, Any]) -> OracleConfig:
    return OracleConfig(
        operator=str(raw.get("operator", "")),
        operator_owner=str(raw.get("operator_owner", "")),
    )


def _build_signer(raw: dict[str, Any]) -> SignerConfig:
    return SignerConfig(private_key=str(raw.get("private_key", "")))


def _build_server(raw: dict[str, Any]) -> ServerConfig:
    host = raw.get("host", ServerConfig.host)
    port = int(raw.get("port", ServerConfig.port))
    return ServerConfig(
        host=host,
        port=port,
        url=raw.get("url", f"http://{host}:{port}"),
        timeout=int(raw.get("timeout", ServerConfig.timeout)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        oracle=_build_oracle(raw.get("oracle") or {}),
        signer=_build_signer(raw.get("signer") or {}),
        server=_build_server(raw.get("server") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    for name in ("operator", "operator_owner"):
        value = getattr(cfg.oracle, name)
        if not value:
            raise ValueError(f"oracle.{name} must be configured")
        try:
            to_address(value)
        except ValueError as e:
            raise ValueError(f"oracle.{name} is not a valid address: {value}") from e
        if is_zero_address(value):
            raise ValueError(f"oracle.{name} must not be the zero address")

    if not 0 < cfg.server.port < 65536:
        raise ValueError(f"server.port out of range: {cfg.server.port}")
    if cfg.server.timeout <= 0:
        raise ValueError("server.timeout must be positive")
