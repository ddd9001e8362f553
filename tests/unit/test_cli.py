"""Tests for the catalog command-line interface."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from product_catalog.api.utils.app_startup import configure_logging
from product_catalog.cli import app
from product_catalog.runtime.config.config_data import (
    CacheConfig,
    ConfigData,
    DatabaseConfig,
)
from product_catalog.runtime.context import with_context

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_config(tmp_path: Path) -> Iterator[None]:
    """Point the CLI at a throwaway SQLite file and the in-memory cache."""
    override = ConfigData(
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'cli.db'}"),
        cache=CacheConfig(backend="memory"),
    )
    with with_context(override):
        yield
    # The CLI bound loguru's stderr sink to the runner's captured stream
    configure_logging()


def test_logging_is_configured_before_commands():
    with patch("product_catalog.cli.configure_logging") as configure:
        result = runner.invoke(app, ["product", "list"])

    assert result.exit_code == 0
    configure.assert_called_once_with(level="WARNING")


def test_log_level_option():
    with patch("product_catalog.cli.configure_logging") as configure:
        runner.invoke(app, ["--log-level", "debug", "product", "list"])

    configure.assert_called_once_with(level="DEBUG")


def test_service_logs_stay_out_of_output():
    result = runner.invoke(app, ["product", "add", "Laptop", "1200"])

    assert result.exit_code == 0
    assert "Created product 1" in result.output
    assert "Cache" not in result.output
    assert "INFO" not in result.output


def test_init_db():
    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0
    assert "Database initialized" in result.output


def test_add_then_get():
    added = runner.invoke(app, ["product", "add", "Laptop", "1200.50"])
    assert added.exit_code == 0
    assert "Created product 1" in added.output

    shown = runner.invoke(app, ["product", "get", "1"])
    assert shown.exit_code == 0
    assert "Laptop" in shown.output
    assert "1200.50" in shown.output


def test_list_products():
    runner.invoke(app, ["product", "add", "Phone", "800"])
    runner.invoke(app, ["product", "add", "Tablet", "500"])

    result = runner.invoke(app, ["product", "list"])

    assert result.exit_code == 0
    assert "Phone" in result.output
    assert "Tablet" in result.output


def test_update_product():
    runner.invoke(app, ["product", "add", "Laptop", "1200"])

    result = runner.invoke(app, ["product", "update", "1", "Laptop Pro", "1300"])

    assert result.exit_code == 0
    assert "Laptop Pro" in result.output


def test_get_unknown_product_fails():
    result = runner.invoke(app, ["product", "get", "99"])

    assert result.exit_code == 1
    assert "Cannot find product with id 99" in result.output


def test_update_unknown_product_fails():
    result = runner.invoke(app, ["product", "update", "99", "Ghost", "1"])
    assert result.exit_code == 1


def test_delete_product():
    runner.invoke(app, ["product", "add", "Smartwatch", "250"])

    deleted = runner.invoke(app, ["product", "rm", "1"])
    assert deleted.exit_code == 0
    assert "Deleted product 1" in deleted.output

    assert runner.invoke(app, ["product", "get", "1"]).exit_code == 1


def test_delete_unknown_product_succeeds():
    assert runner.invoke(app, ["product", "rm", "42"]).exit_code == 0


def test_invalid_price_is_rejected():
    result = runner.invoke(app, ["product", "add", "Laptop", "cheap"])
    assert result.exit_code != 0
