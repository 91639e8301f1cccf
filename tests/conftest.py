"""Shared test configuration and fixtures."""

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

import orderflow_tools.core.config as config_module

_CONFIG_ENV_VARS = (
    "BUBBLE_CHART_INTERVAL",
    "BUBBLE_CHART_THRESHOLD_Q",
    "BUBBLE_CHART_BIG_PLAYER",
)


@pytest.fixture(autouse=True)
def _isolate_config() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Run every test against the packaged defaults.

    Strip the ``BUBBLE_CHART_*`` overrides that ``settings.yaml`` reads
    from the environment and reset the lazily created ``ConfigLoader``
    so that no test sees configuration left behind by another.
    """
    clean_env = {k: v for k, v in os.environ.items() if k not in _CONFIG_ENV_VARS}
    config_module._config = None  # pyright: ignore[reportPrivateUsage]
    with patch.dict(os.environ, clean_env, clear=True):
        yield
    config_module._config = None  # pyright: ignore[reportPrivateUsage]
