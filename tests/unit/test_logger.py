import logging

import pytest

from permit_intake.logging.logger import Log


class TestRender:
    def test_message_without_fields(self) -> None:
        assert Log._render("Stored file", {}) == "Stored file"

    def test_appends_fields_in_order(self) -> None:
        rendered = Log._render("Stored file", {"item": "abc", "size": 42})
        assert rendered == "Stored file item=abc size=42"


class TestLogging:
    def test_info_emits_rendered_message(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="permit_intake"):
            Log.info("Detected PAT_MUN", item="abc")
        assert "Detected PAT_MUN item=abc" in caplog.text

    def test_error_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="permit_intake"):
            Log.error("upload failed", item="abc")
        assert caplog.records[-1].levelno == logging.ERROR

    def test_debug_is_filtered_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="permit_intake"):
            Log.debug("Recognition progress", progress=55)
        assert "Recognition progress" not in caplog.text


class TestConfigure:
    def test_sets_level_and_single_handler(self) -> None:
        Log.configure("warning")
        Log.configure("debug")
        logger = logging.getLogger("permit_intake")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        Log.configure("info")
