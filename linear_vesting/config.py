# linear_vesting/config.py
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .context import AssetClass

load_dotenv(override=False)


class ConfigError(RuntimeError):
    pass


def _get_env(name: str, default: Optional[str] = None) -> str:
    val = os.getenv(name, default)
    return val if val is not None else ""


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} is not an integer: {raw!r}") from e


def _parse_hex(name: str, raw: str) -> bytes:
    try:
        return bytes.fromhex(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{name} is not valid hex: {raw!r}") from e


@dataclass
class Settings:
    # Governed token
    VESTING_POLICY_ID: str = field(default_factory=lambda: _get_env("VESTING_POLICY_ID", ""))
    VESTING_ASSET_NAME: str = field(default_factory=lambda: _get_env("VESTING_ASSET_NAME", ""))
    # App
    LOG_LEVEL: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    HOST: str = field(default_factory=lambda: _get_env("HOST", "0.0.0.0"))
    PORT: int = field(default_factory=lambda: _get_int("PORT", 10000))

    def asset(self) -> AssetClass:
        """Token the validator is built for"""
        if not self.VESTING_POLICY_ID.strip():
            raise ConfigError("Missing required env key: VESTING_POLICY_ID")
        return AssetClass(
            policy_id=_parse_hex("VESTING_POLICY_ID", self.VESTING_POLICY_ID),
            asset_name=_parse_hex("VESTING_ASSET_NAME", self.VESTING_ASSET_NAME),
        )


def load_settings() -> Settings:
    return Settings()
