"""Shared pytest fixtures for domain, adapter, CLI and module-entry tests.

Fixtures use descriptive names that read as plain English; tests receive
them through pytest's conftest discovery.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from shrinkconf.adapters.memory.task import TaskStub
    from shrinkconf.composition import AppServices


def _load_dotenv() -> None:
    """Load a project ``.env`` when present so LOG_* settings apply to tests."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` when parsing output so log lines on stderr do not
    interfere.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for CLI invocations."""
    from shrinkconf.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test.

    Use this whenever a test reads or mutates the global
    ``lib_cli_exit_tools.config`` traceback flags.
    """
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the cached layered configuration before the test.

    Only clears before, not after, because a test may monkeypatch
    ``get_config`` and lose its ``cache_clear``.
    """
    from shrinkconf.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without file I/O.

    Example:
        def test_marker(config_factory: Callable[[dict[str, Any]], Config]) -> None:
            config = config_factory({"shrinkconf": {"exclusion_marker": "~"}})
            assert config.get("shrinkconf.exclusion_marker") == "~"
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def task_stub() -> TaskStub:
    """Provide an empty TaskStub to register assemblers on."""
    from shrinkconf.adapters.memory.task import TaskStub

    return TaskStub()


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory producing production services with an injected Config.

    Only the ``get_config`` I/O boundary is replaced; description loading,
    rendering and logging stay real.

    Example:
        def test_assemble(cli_runner, config_factory, inject_config, tmp_path) -> None:
            factory = inject_config(config_factory({"shrinkconf": {"exclusion_marker": "~"}}))
            result = cli_runner.invoke(cli, ["assemble", str(tmp_path / "build.toml")], obj=factory)
    """
    from shrinkconf.composition import AppServices, build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = replace(build_production(), get_config=_fake_get_config)
        return lambda: test_services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose ``get_config`` records the profiles it receives.

    Example:
        def test_profile_passed(cli_runner, config_factory, inject_config_with_profile_capture) -> None:
            captured: list[str | None] = []
            factory = inject_config_with_profile_capture(config_factory({}), captured)
            cli_runner.invoke(cli, ["--profile", "staging", "config"], obj=factory)
            assert captured == ["staging"]
    """
    from shrinkconf.composition import AppServices, build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        test_services = replace(build_production(), get_config=_capturing_get_config)
        return lambda: test_services

    return _inject


@pytest.fixture
def stub_services() -> Callable[[TaskStub], Callable[[], AppServices]]:
    """Return a factory wiring in-memory config and task loading around a TaskStub.

    The logging runtime stays real so the commands' log bindings have a
    runtime to bind to.
    """
    from shrinkconf.adapters.logging.setup import init_logging
    from shrinkconf.composition import AppServices, build_testing

    def _create(stub: TaskStub) -> Callable[[], AppServices]:
        services = replace(build_testing(stub=stub), init_logging=init_logging)
        return lambda: services

    return _create


@pytest.fixture
def inject_task_stub(
    task_stub: TaskStub,
    stub_services: Callable[[TaskStub], Callable[[], AppServices]],
) -> Callable[[], AppServices]:
    """Return a services factory serving assemblers from ``task_stub``."""
    return stub_services(task_stub)


@pytest.fixture
def write_description(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing a TOML build description under ``tmp_path``.

    Example:
        def test_load(write_description) -> None:
            path = write_description('[[filter]]\\noption = "dontwarn"\\n')
            assert path.name == "build.toml"
    """

    def _write(content: str, name: str = "build.toml") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
