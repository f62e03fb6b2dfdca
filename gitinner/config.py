"""Application configuration stored as TOML."""

from __future__ import annotations

import functools
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG_FILE = "config.toml"


def config_path() -> Path:
    """Path of the config file: $CONFIG_FILE or config.toml."""
    return Path(os.environ.get("CONFIG_FILE", DEFAULT_CONFIG_FILE))


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if kind is int and isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(f"invalid type for field `{key}`")
    return value


def _port(value: int) -> int:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"port out of range: {value}")
    return value


@dataclass
class SshConfig:
    enabled: bool = False
    host: str = "0.0.0.0"
    port: int = 22
    user: str = ""
    server_public_key: str | None = None

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> SshConfig:
        key = data.get("server_public_key")
        if key is not None and not isinstance(key, str):
            raise ValueError("invalid type for field `server_public_key`")
        return cls(
            enabled=_require(data, "enabled", bool),
            host=_require(data, "host", str),
            port=_port(_require(data, "port", int)),
            user=_require(data, "user", str),
            server_public_key=key,
        )

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "enabled": self.enabled,
            "host": self.host,
            "port": self.port,
            "user": self.user,
        }
        if self.server_public_key is not None:
            out["server_public_key"] = self.server_public_key
        return out


@dataclass
class RpcConfig:
    url: str
    port: int


@dataclass
class AppConfig:
    ssh: SshConfig = field(default_factory=SshConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        return cls(ssh=SshConfig._from_dict(_require(data, "ssh", dict)))

    def to_dict(self) -> dict[str, Any]:
        return {"ssh": self.ssh._to_dict()}

    @classmethod
    def load(cls) -> AppConfig:
        """Read the config file; if it cannot be read, write and return the default."""
        path = config_path()
        try:
            content = path.read_text(encoding="utf-8")
        except OSError:
            default = cls()
            default.save()
            return default
        return cls.from_dict(tomllib.loads(content))

    def save(self) -> None:
        config_path().write_text(tomli_w.dumps(self.to_dict()), encoding="utf-8")

    @classmethod
    def cfg(cls) -> AppConfig:
        """The process-wide configuration, loaded once."""
        return _global_config()


@functools.cache
def _global_config() -> AppConfig:
    return AppConfig.load()