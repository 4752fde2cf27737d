"""Tests for the logging configuration model.

LoggingConfigModel validation is tested here. The init_logging function
is exercised via CLI integration tests in test_cli_core.py.
"""

from __future__ import annotations

import pytest
from lib_layered_config import Config

from shrinkconf.adapters.logging.setup import LoggingConfigModel, _build_runtime_config


@pytest.mark.os_agnostic
def test_logging_config_model_allows_extra_fields() -> None:
    """Extra fields pass through for lib_log_rich RuntimeConfig."""
    parsed = LoggingConfigModel.model_validate({"service": "test", "environment": "dev", "custom_field": "value"})

    assert parsed.service == "test"
    assert parsed.environment == "dev"
    extra = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    assert extra == {"custom_field": "value"}


@pytest.mark.os_agnostic
def test_logging_config_model_defaults() -> None:
    """Empty input produces sensible defaults."""
    parsed = LoggingConfigModel.model_validate({})

    assert parsed.service is None
    assert parsed.environment == "prod"


@pytest.mark.os_agnostic
def test_runtime_config_falls_back_to_package_name() -> None:
    """Without a configured service the package name identifies the logs."""
    runtime_config = _build_runtime_config(Config({"lib_log_rich": {"environment": "test"}}, {}))

    assert runtime_config.service == "shrinkconf"
    assert runtime_config.environment == "test"
