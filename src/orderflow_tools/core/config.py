"""Configuration defaults for order-flow tools.

Defaults for the bubble chart CLI live in ``config/settings.yaml`` inside the
package. A ``settings.local.yaml`` next to it is merged on top, and any value
written as ``${VAR}`` or ``${VAR:default}`` is read from the environment
after ``.env`` has been loaded.
"""

import os
import re
from pathlib import Path
from typing import Any, cast

import yaml
from dotenv import load_dotenv

_DEFAULT_CONFIG_DIR = Path(__file__).parent.parent / "config"
_SETTINGS_FILES = ("settings.yaml", "settings.local.yaml")
_ENV_REF = re.compile(r"^\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}$")
_EMBEDDED_ENV_REF = re.compile(r"\$\{[^}]+\}")


class ConfigError(Exception):
    """Raise when configuration loading or validation fails."""


def _merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Merge ``override`` into ``base`` in place, recursing into sections."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _merge(cast("dict[str, Any]", current), cast("dict[str, Any]", value))
        else:
            base[key] = value


def _resolve_env(value: Any) -> Any:
    """Replace whole-string ``${VAR[:default]}`` references with env values."""
    if isinstance(value, dict):
        section = cast("dict[str, Any]", value)
        return {key: _resolve_env(item) for key, item in section.items()}
    if isinstance(value, list):
        return [_resolve_env(item) for item in cast("list[Any]", value)]
    if not isinstance(value, str):
        return value

    match = _ENV_REF.match(value)
    if match is not None:
        resolved = os.getenv(match.group("name"), match.group("default"))
        if resolved is None:
            msg = (
                f"Required environment variable ${{{match.group('name')}}} "
                "is not set and has no default"
            )
            raise ConfigError(msg)
        return resolved
    if _EMBEDDED_ENV_REF.search(value):
        msg = f"Unresolved environment variable reference in: {value}"
        raise ConfigError(msg)
    return value


class ConfigLoader:
    """Read the layered YAML settings and answer dot-notation lookups."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Load ``.env`` and the settings files from ``config_dir``.

        Args:
            config_dir: Directory holding ``settings.yaml``. Defaults to the
                ``config`` directory shipped with the package.

        Raises:
            ConfigError: If an environment reference cannot be resolved.

        """
        load_dotenv()
        self.config_dir = Path(config_dir) if config_dir is not None else _DEFAULT_CONFIG_DIR
        merged: dict[str, Any] = {}
        for name in _SETTINGS_FILES:
            path = self.config_dir / name
            if path.exists():
                with path.open() as f:
                    _merge(merged, cast("dict[str, Any]", yaml.safe_load(f) or {}))
        self._config: dict[str, Any] = _resolve_env(merged)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at a dot-notation key such as ``bubble_chart.threshold_q``.

        Missing keys, and keys that walk into a non-mapping, yield ``default``.
        """
        current: Any = self._config
        for part in key.split("."):
            if not isinstance(current, dict):
                return default
            current = cast("dict[str, Any]", current).get(part)
            if current is None:
                return default
        return current

    def get_int(self, key: str, default: int) -> int:
        """Get an integer configuration value.

        Environment substitution always yields strings, so coerce the
        raw value with ``int()``.

        Args:
            key: Configuration key in dot notation.
            default: Value returned when the key is absent.

        Returns:
            The integer value.

        Raises:
            ConfigError: If the value cannot be interpreted as an integer.

        """
        raw: Any = self.get(key, default)
        if isinstance(raw, bool):
            msg = f"{key} must be an integer, got {raw!r}"
            raise ConfigError(msg)
        try:
            return int(raw)
        except (TypeError, ValueError) as exc:
            msg = f"{key} must be an integer, got {raw!r}"
            raise ConfigError(msg) from exc


_config: ConfigLoader | None = None


def get_config() -> ConfigLoader:
    """Return the shared ``ConfigLoader``, creating it on first use.

    Lazy initialisation avoids side effects (file I/O, ``load_dotenv``)
    at import time and makes testing easier. The loader only supplies
    defaults; per-run settings live in ``PipelineConfig``.

    Returns:
        The shared ``ConfigLoader`` instance.

    """
    global _config  # noqa: PLW0603
    if _config is None:
        _config = ConfigLoader()
    return _config
