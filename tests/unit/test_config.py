"""Tests for configuration loading."""

import pytest

from waypoint.config import load_config


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.setenv("WAYPOINT_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("WAYPOINT_LOG_LEVEL", raising=False)

    config = load_config()
    assert config.chains["order"] == ["New", "Processing", "Shipped", "Delivered"]
    assert config.history.max_depth is None
    assert config.log_level == "WARNING"
    assert config.build_chain().initial.description == "Order is in NEW state."


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "waypoint.yaml"
    config_path.write_text(
        """
chains:
  ticket: [Open, InProgress, Resolved]
descriptions:
  ticket:
    Open: Ticket is open.
history:
  max_depth: 5
log_level: debug
"""
    )
    monkeypatch.setenv("WAYPOINT_CONFIG", str(config_path))
    monkeypatch.delenv("WAYPOINT_LOG_LEVEL", raising=False)

    config = load_config()
    assert set(config.chains) == {"order", "ticket"}
    assert config.history.max_depth == 5
    assert config.log_level == "DEBUG"

    chain = config.build_chain("ticket")
    assert chain.labels == ["Open", "InProgress", "Resolved"]
    assert chain.initial.description == "Ticket is open."
    assert chain.terminal.description is None


def test_log_level_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("WAYPOINT_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("WAYPOINT_LOG_LEVEL", "info")

    assert load_config().log_level == "INFO"


def test_unknown_chain_raises(tmp_path):
    config = load_config(str(tmp_path / "missing.yaml"))

    with pytest.raises(KeyError):
        config.build_chain("nope")


def test_invalid_history_depth(tmp_path):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("history:\n  max_depth: 0\n")

    with pytest.raises(ValueError):
        load_config(str(config_path))


def test_unknown_log_level_is_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("WAYPOINT_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("WAYPOINT_LOG_LEVEL", "verbose")

    with pytest.raises(ValueError):
        load_config()
