"""
Test suite for logging helpers and correlation IDs.

System role: Verification of observability utilities
"""

import logging

from archmen.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from archmen.observability.log_utils import log_with_context, safe_log_value
from archmen.observability.logger import CorrelationIdFilter


class TestCorrelationId:
    def test_set_generates_id_when_missing(self) -> None:
        value = set_correlation_id()

        assert value
        assert get_correlation_id() == value
        clear_correlation_id()

    def test_filter_attaches_current_id(self) -> None:
        set_correlation_id("req-42")
        record = logging.LogRecord("archmen", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "req-42"
        clear_correlation_id()

    def test_filter_outside_request_uses_placeholder(self) -> None:
        clear_correlation_id()
        record = logging.LogRecord("archmen", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"


class TestSafeLogValue:
    def test_vectors_are_summarised(self) -> None:
        assert safe_log_value([0.1] * 1536) == "list(1536 items)"

    def test_long_strings_are_truncated(self) -> None:
        result = safe_log_value("x" * 20, max_length=5)

        assert result.startswith("xxxxx...")
        assert "20 total" in result

    def test_log_with_context_passes_safe_extra(self, caplog) -> None:
        logger = logging.getLogger("archmen.tests")

        with caplog.at_level(logging.WARNING, logger="archmen.tests"):
            log_with_context(logger, logging.WARNING, "Invalid request", details={"field": "query"})

        assert caplog.records[-1].details == "dict(1 keys)"
