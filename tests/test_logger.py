"""
Tests for the structured event logger and template catalog
"""

import json
import logging

import pytest

from gralirc.logs import event_catalog
from gralirc.logs.logger import ClientLogger


@pytest.fixture
def client_logger(caplog, monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    caplog.set_level(logging.DEBUG, logger="gral_irc")
    return ClientLogger()


class TestClientLogger:
    def test_template_renders_with_prefix(self, client_logger, caplog):
        client_logger.log_event("irc", "joined_channel", user="me", channel="#x")
        assert "[me#x" in caplog.text
        assert "Joined #x" in caplog.text

    def test_system_prefix_without_user(self, client_logger, caplog):
        client_logger.log_event("irc", "listener_stopped")
        assert "[system" in caplog.text

    def test_derived_text_for_unknown_event(self, client_logger, caplog):
        client_logger.log_event("irc", "something_new", user="me")
        assert "irc: something new" in caplog.text

    def test_human_text_overrides_template(self, client_logger, caplog):
        client_logger.log_event("irc", "welcome", human="custom text", user="me")
        assert "custom text" in caplog.text

    def test_missing_template_field_falls_back_to_raw_template(
        self, client_logger, caplog
    ):
        client_logger.log_event("irc", "connect_start", user="me")
        assert "{server}" in caplog.text

    def test_level_is_respected(self, client_logger, caplog):
        client_logger.log_event("irc", "server_error", level=logging.ERROR, error="x")
        assert caplog.records[-1].levelno == logging.ERROR

    def test_debug_mode_appends_context(self, client_logger, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        client_logger.log_event("irc", "raw", level=logging.DEBUG, user="me", raw="PING :x")
        assert "irc_raw" in caplog.text
        assert "raw=PING :x" in caplog.text

    def test_disabled_level_is_skipped(self, caplog, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        caplog.set_level(logging.WARNING, logger="gral_irc")
        ClientLogger().log_event("irc", "raw", level=logging.DEBUG, raw="x")
        assert caplog.records == []


class TestEventCatalog:
    def test_catalog_covers_pipeline_events(self):
        for action in ("raw", "malformed_frame", "unknown_command", "handler_error"):
            assert ("irc", action) in event_catalog.EVENT_TEMPLATES

    def test_reload_from_custom_file(self, tmp_path):
        path = tmp_path / "templates.json"
        path.write_text(json.dumps({"x": {"y": "hello {who}"}}), encoding="utf-8")
        try:
            event_catalog.reload_event_templates(path)
            assert event_catalog.EVENT_TEMPLATES == {("x", "y"): "hello {who}"}
        finally:
            event_catalog.reload_event_templates()

    def test_missing_file_records_load_error(self, tmp_path):
        try:
            event_catalog.reload_event_templates(tmp_path / "nope.json")
            assert ("app", "load_error") in event_catalog.EVENT_TEMPLATES
        finally:
            event_catalog.reload_event_templates()
