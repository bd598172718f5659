"""Tests for logging processors and request context."""

import logging

import structlog

from src.config import Settings
from src.core.context import (
    RequestContext,
    clear_context,
    get_context,
    get_request_id,
    set_request_id,
    set_viewer_id,
)
from src.core.logging import (
    add_context_processor,
    build_shared_processors,
    configure_structlog,
    truncate_content_processor,
)


class TestTruncateContentProcessor:
    """Tests for truncate_content_processor."""

    def test_long_content_is_shortened(self) -> None:
        processor = truncate_content_processor(5)

        event = processor(None, "info", {"event": "x", "content": "abcdefgh"})

        assert event["content"] == "abcde..."

    def test_short_and_other_keys_untouched(self) -> None:
        processor = truncate_content_processor(5)

        event = processor(
            None, "info", {"event": "long_event_name", "message": "abc", "path": "/v1/feed"}
        )

        assert event == {"event": "long_event_name", "message": "abc", "path": "/v1/feed"}

    def test_non_string_values_untouched(self) -> None:
        processor = truncate_content_processor(1)

        assert processor(None, "info", {"content": 12345})["content"] == 12345


class TestContext:
    """Tests for request context helpers."""

    def teardown_method(self) -> None:
        clear_context()

    def test_context_processor_adds_ids(self) -> None:
        set_request_id("req-1")
        set_viewer_id("u1")

        event = add_context_processor(None, "info", {"event": "x"})

        assert event["request_id"] == "req-1"
        assert event["viewer_id"] == "u1"

    def test_explicit_fields_win(self) -> None:
        set_viewer_id("u1")

        event = add_context_processor(None, "info", {"viewer_id": "u2"})

        assert event["viewer_id"] == "u2"

    def test_clear(self) -> None:
        set_request_id()
        set_viewer_id("u1")

        clear_context()

        assert get_context() == {}

    def test_request_context_restores(self) -> None:
        with RequestContext(request_id="req-2", viewer_id="u3"):
            assert get_context() == {"request_id": "req-2", "viewer_id": "u3"}

        assert get_request_id() == ""


class TestConfigureStructlog:
    """Tests for configure_structlog."""

    def test_caller_info_is_optional(self) -> None:
        plain = build_shared_processors(Settings(log_include_caller_info=False))
        detailed = build_shared_processors(Settings(log_include_caller_info=True))

        assert len(detailed) == len(plain) + 1

    def test_file_output(self, tmp_path) -> None:
        settings = Settings(log_to_file=True, log_format="json")

        configure_structlog(settings, log_dir=tmp_path)

        try:
            assert (tmp_path / f"{settings.app_name}.log").exists()
        finally:
            logging.getLogger().handlers.clear()
            structlog.reset_defaults()
