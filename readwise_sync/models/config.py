"""Configuration models for the sync system."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

AUTH_BACKENDS = ("standard", "password-store")
READWISE_HOST = "readwise.io"


def sanitize_filename(name: str) -> str:
    """Sanitize a title for use as a file or directory name.

    Every character that is not alphanumeric, a hyphen or an underscore is
    replaced with a hyphen, one for one ("A/B: Test?" -> "A-B--Test-").
    """
    sanitized = re.sub(r"[^\w\-]", "-", name)
    # Handle empty result
    return sanitized or "untitled"


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Return a nested mapping; a missing or null section is empty."""
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{key}' must be a mapping")
    return section


def _env_flag(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AuthSettings:
    """Where to look for the Readwise API token."""

    backend: str = "standard"  # "standard" or "password-store"
    host: str = READWISE_HOST
    authinfo_files: list[str] = field(default_factory=lambda: ["~/.authinfo", "~/.netrc"])
    pass_entry: str = READWISE_HOST

    def __post_init__(self) -> None:
        if self.backend not in AUTH_BACKENDS:
            raise ValueError(
                f"Unknown auth backend '{self.backend}'. "
                f"Expected one of: {', '.join(AUTH_BACKENDS)}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuthSettings":
        """Create from dictionary."""
        defaults = cls()
        return cls(
            backend=data.get("backend") or defaults.backend,
            host=data.get("host") or defaults.host,
            authinfo_files=data.get("authinfo_files") or defaults.authinfo_files,
            pass_entry=data.get("pass_entry") or defaults.pass_entry,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return {
            "backend": self.backend,
            "host": self.host,
            "authinfo_files": self.authinfo_files,
            "pass_entry": self.pass_entry,
        }


@dataclass
class SyncSettings:
    """Sync operation settings."""

    debug: bool = False
    timeout: float | None = 30


@dataclass
class SyncConfig:
    """Main configuration for the sync system.

    Passed explicitly to every component; nothing reads settings from
    module-level state.
    """

    output_dir: str = "~/org/roam/readwise"
    base_url: str = "https://readwise.io"
    reindex_command: list[str] | None = None
    auth: AuthSettings = field(default_factory=AuthSettings)
    settings: SyncSettings = field(default_factory=SyncSettings)

    @property
    def output_path(self) -> Path:
        """Output root with ``~`` expanded."""
        return Path(self.output_dir).expanduser()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncConfig":
        """Create from dictionary.

        Raises:
            ValueError: If the data or one of its sections is not a mapping
        """
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")

        settings_data = _section(data, "settings")
        settings = SyncSettings(
            debug=bool(settings_data.get("debug") or False),
            timeout=settings_data.get("timeout", 30),
        )

        base_url = data.get("base_url") or "https://readwise.io"
        return cls(
            output_dir=data.get("output_dir") or "~/org/roam/readwise",
            base_url=str(base_url).rstrip("/"),
            reindex_command=data.get("reindex_command") or None,
            auth=AuthSettings.from_dict(_section(data, "auth")),
            settings=settings,
        )

    @classmethod
    def load(cls, config_path: Path | None = None) -> "SyncConfig":
        """Load configuration from a YAML file, then apply .env overrides.

        A missing file yields the defaults.
        """
        data: dict[str, Any] = {}
        if config_path is not None and Path(config_path).exists():
            with open(config_path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

        config = cls.from_dict(data)
        config.apply_env()
        return config

    def apply_env(self) -> None:
        """Override values from READWISE_* environment variables (.env aware)."""
        load_dotenv()

        output_dir = os.getenv("READWISE_OUTPUT_DIR")
        if output_dir:
            self.output_dir = output_dir

        base_url = os.getenv("READWISE_BASE_URL")
        if base_url:
            self.base_url = base_url.rstrip("/")

        backend = os.getenv("READWISE_AUTH_BACKEND")
        if backend:
            self.auth = AuthSettings(
                backend=backend,
                host=self.auth.host,
                authinfo_files=self.auth.authinfo_files,
                pass_entry=self.auth.pass_entry,
            )

        debug = _env_flag(os.getenv("READWISE_DEBUG"))
        if debug is not None:
            self.settings.debug = debug

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        data: dict[str, Any] = {
            "output_dir": self.output_dir,
            "base_url": self.base_url,
        }
        if self.reindex_command:
            data["reindex_command"] = self.reindex_command
        data["auth"] = self.auth.to_dict()
        data["settings"] = {
            "debug": self.settings.debug,
            "timeout": self.settings.timeout,
        }
        return data

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
