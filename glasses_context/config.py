"""
Configuration management for glasses-context.

Settings come from three layers, lowest priority first:
1. Dataclass defaults
2. Optional JSON config file (~/.glasses-context/config.json)
3. Environment variables (a project-root .env is loaded first)
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .errors import MissingConfigurationError

# Auto-load .env from project root
_project_root = Path(__file__).parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

CONFIG_PATH = Path.home() / ".glasses-context" / "config.json"

DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
DEFAULT_PORT = 3000


def _filter_dataclass_fields(data: dict[str, Any], cls: type) -> dict[str, Any]:
    """Filter dict to only include fields that exist in the dataclass."""
    valid_fields = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in valid_fields}


@dataclass
class ReasoningConfig:
    """Anthropic Messages API settings."""

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    base_url: str | None = None
    max_tokens: int = 1024
    # Low temperature for repeatable answers
    temperature: float = 0.1

    def require_api_key(self) -> str:
        """Return the API key or fail fast if it is not configured."""
        if not self.api_key:
            raise MissingConfigurationError(
                "Anthropic API key missing (set ANTHROPIC_API_KEY)"
            )
        return self.api_key


@dataclass
class ServerConfig:
    """Ingestion HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT


@dataclass
class StorageConfig:
    """Where artifacts and logs live."""

    data_dir: str = "./data"
    logs_dir: str = "./logs"

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser().resolve()

    @property
    def logs_path(self) -> Path:
        return Path(self.logs_dir).expanduser().resolve()


@dataclass
class AppConfig:
    """Complete glasses-context configuration."""

    reasoning: ReasoningConfig = field(default_factory=ReasoningConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> "AppConfig":
        """
        Load configuration from file and environment.

        Args:
            path: Optional config file path. Defaults to ~/.glasses-context/config.json
            environ: Environment mapping (defaults to os.environ)

        Returns:
            AppConfig with file values and env overrides applied
        """
        if path is None:
            path = CONFIG_PATH
        if environ is None:
            environ = dict(os.environ)

        data: dict[str, Any] = {}
        if path.exists():
            with open(path) as f:
                data = json.load(f)

        config = cls(
            reasoning=ReasoningConfig(**_filter_dataclass_fields(data.get("reasoning", {}), ReasoningConfig)),
            server=ServerConfig(**_filter_dataclass_fields(data.get("server", {}), ServerConfig)),
            storage=StorageConfig(**_filter_dataclass_fields(data.get("storage", {}), StorageConfig)),
        )
        config.apply_env(environ)
        return config

    def apply_env(self, environ: dict[str, str]) -> None:
        """Override settings from environment variables."""
        if environ.get("ANTHROPIC_API_KEY"):
            self.reasoning.api_key = environ["ANTHROPIC_API_KEY"]
        if environ.get("ANTHROPIC_MODEL"):
            self.reasoning.model = environ["ANTHROPIC_MODEL"]
        if environ.get("ANTHROPIC_BASE_URL"):
            self.reasoning.base_url = environ["ANTHROPIC_BASE_URL"]
        if environ.get("PORT"):
            self.server.port = int(environ["PORT"])
        if environ.get("GLASSES_CONTEXT_DATA_DIR"):
            self.storage.data_dir = environ["GLASSES_CONTEXT_DATA_DIR"]
        if environ.get("GLASSES_CONTEXT_LOGS_DIR"):
            self.storage.logs_dir = environ["GLASSES_CONTEXT_LOGS_DIR"]

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file. The API key is never written."""
        if path is None:
            path = CONFIG_PATH

        path.parent.mkdir(parents=True, exist_ok=True)

        reasoning = asdict(self.reasoning)
        reasoning.pop("api_key")
        with open(path, "w") as f:
            json.dump(
                {
                    "reasoning": reasoning,
                    "server": asdict(self.server),
                    "storage": asdict(self.storage),
                },
                f,
                indent=2,
            )


__all__ = [
    "AppConfig",
    "CONFIG_PATH",
    "DEFAULT_MODEL",
    "DEFAULT_PORT",
    "ReasoningConfig",
    "ServerConfig",
    "StorageConfig",
]
