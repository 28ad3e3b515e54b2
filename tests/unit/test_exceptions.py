"""Unit tests for exception handling system.

Tests both the exception hierarchy and the exception handler utilities.
"""

import json
import logging

import pytest

from mofped_assistant.common.exception_handler import (
    MAX_LOGGED_QUERY_CHARS,
    describe_exception,
    error_body,
    get_http_status_code,
    log_exception,
)
from mofped_assistant.core.domain import Intent
from mofped_assistant.core.domain.exceptions import (
    AssistantError,
    ConfigurationError,
    ContentStoreConnectionError,
    ContentStoreError,
    ContentStoreQueryError,
    EmptyQueryError,
    InvalidConfigurationError,
    PageFetchError,
    QueryTimeoutError,
    QueryTooLongError,
    RateLimitExceededError,
    RoutingError,
    ScrapingError,
    ValidationError,
)

# Apply @pytest.mark.unit to all tests in this module
pytestmark = pytest.mark.unit


class TestExceptionHierarchy:
    """Tests for the exception class hierarchy."""

    def test_assistant_error_is_base(self):
        """AssistantError should be the base for all custom exceptions."""
        assert issubclass(ConfigurationError, AssistantError)
        assert issubclass(ContentStoreError, AssistantError)
        assert issubclass(ScrapingError, AssistantError)
        assert issubclass(RoutingError, AssistantError)
        assert issubclass(ValidationError, AssistantError)
        assert issubclass(RateLimitExceededError, AssistantError)

    def test_store_errors_inherit_from_content_store(self):
        assert issubclass(ContentStoreConnectionError, ContentStoreError)
        assert issubclass(ContentStoreQueryError, ContentStoreError)

    def test_validation_errors(self):
        assert issubclass(EmptyQueryError, ValidationError)
        assert issubclass(QueryTooLongError, ValidationError)

    def test_misc_subclasses(self):
        assert issubclass(InvalidConfigurationError, ConfigurationError)
        assert issubclass(PageFetchError, ScrapingError)
        assert issubclass(QueryTimeoutError, RoutingError)


class TestExceptionCreation:
    """Tests for creating and using exceptions."""

    def test_basic_exception_creation(self):
        """Basic exception should have message and error code."""
        exc = AssistantError("Test error message")
        assert str(exc) == "Test error message"
        assert exc.message == "Test error message"
        assert exc.error_code == "MOF_ERR_001"

    def test_exception_with_context_and_cause(self):
        original = ConnectionError("Network unreachable")
        exc = PageFetchError("Fetch failed", cause=original, context={"url": "https://x"})
        assert exc.cause is original
        assert exc.context["url"] == "https://x"

    def test_exception_captures_location(self):
        """Exception should capture the raising method and a line number."""
        exc = AssistantError("Test")
        assert exc.site.function == "test_exception_captures_location"
        assert exc.site.owner == "TestExceptionCreation"
        assert exc.site.file == "test_exceptions.py"
        assert exc.site.line > 0

    def test_each_exception_has_unique_error_code(self):
        """Each exception type should have a unique error code."""
        classes = [
            AssistantError,
            ConfigurationError,
            InvalidConfigurationError,
            ValidationError,
            EmptyQueryError,
            QueryTooLongError,
            ContentStoreError,
            ContentStoreConnectionError,
            ContentStoreQueryError,
            ScrapingError,
            PageFetchError,
            RoutingError,
            QueryTimeoutError,
            RateLimitExceededError,
        ]
        codes = {cls.error_code for cls in classes}
        assert len(codes) == len(classes)
        assert all(code.startswith("MOF_") for code in codes)


class TestExceptionToDict:
    """Tests for exception JSON serialization."""

    def test_to_dict_basic_structure(self):
        exc = ContentStoreQueryError("Test error")
        result = exc.to_dict()

        assert result["error"] == {
            "type": "ContentStoreQueryError",
            "code": "MOF_STO_003",
            "message": "Test error",
        }
        assert {"class", "method", "file", "line", "timestamp"} <= set(result["location"])

    def test_to_dict_includes_cause(self):
        exc = ValidationError("Invalid input", cause=ValueError("Bad value"))
        result = exc.to_dict()

        assert result["cause"] == {"type": "ValueError", "message": "Bad value"}

    def test_to_dict_excludes_trace_by_default(self):
        exc = ValidationError("Invalid input", cause=ValueError("Bad value"))
        assert "stack_trace" not in exc.to_dict()

    def test_to_dict_is_json_serializable(self):
        exc = RateLimitExceededError("Too many", context={"retry_after": 2})
        json_str = json.dumps(exc.to_dict())
        assert "MOF_RTE_003" in json_str


class TestExceptionHandler:
    """Tests for exception handler utilities."""

    def test_describe_standard_exception(self):
        """describe_exception should handle standard Python exceptions."""
        try:
            raise ValueError("Standard error")
        except ValueError as e:
            result = describe_exception(e)

        assert result["error"]["type"] == "ValueError"
        assert result["error"]["code"] == "PYTHON_ERR"
        assert result["location"]["method"] == "test_describe_standard_exception"

    def test_describe_merges_context(self):
        exc = ContentStoreQueryError("Test", context={"db_path": "x.db"})
        result = describe_exception(exc, context={"path": "/api/ask"})

        assert result["context"] == {"db_path": "x.db", "path": "/api/ask"}
        assert exc.context == {"db_path": "x.db"}

    def test_error_body_is_tagged_for_the_client(self):
        body = error_body(RoutingError("Handler failed"), summary="Sorry")

        assert body["error"]["code"] == "MOF_RTE_001"
        assert body["summary"] == "Sorry"
        assert body["guardrail_status"] == "error"
        assert "stack_trace" not in body

    def test_log_exception_carries_query_and_intent(self, caplog):
        log = logging.getLogger("tests.exceptions")
        with caplog.at_level(logging.ERROR, logger="tests.exceptions"):
            log_exception(
                QueryTimeoutError("slow", context={"timeout_seconds": 15}),
                log=log,
                query="where is the ministry " + "x" * 500,
                intent=Intent.LOCATION,
            )

        record = caplog.records[-1]
        assert record.error_code == "MOF_RTE_002"
        assert record.intent == "location"

        payload = json.loads(record.getMessage())
        assert payload["error"]["code"] == "MOF_RTE_002"
        assert payload["context"]["intent"] == "location"
        assert payload["context"]["timeout_seconds"] == 15
        assert payload["context"]["query"].startswith("where is the ministry")
        assert payload["context"]["query"].endswith("...")
        assert len(payload["context"]["query"]) <= MAX_LOGGED_QUERY_CHARS + len("...")

    def test_log_exception_without_query(self, caplog):
        log = logging.getLogger("tests.exceptions")
        with caplog.at_level(logging.WARNING, logger="tests.exceptions"):
            log_exception(
                EmptyQueryError("Query is required"),
                log=log,
                level=logging.WARNING,
                path="/api/ask",
            )

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.intent is None
        assert json.loads(record.getMessage())["context"] == {"path": "/api/ask"}


class TestHTTPStatusCodes:
    """Tests for HTTP status code mapping."""

    @pytest.mark.parametrize(
        "exc, status",
        [
            (EmptyQueryError("test"), 400),
            (QueryTooLongError("test"), 400),
            (RateLimitExceededError("test"), 429),
            (ContentStoreConnectionError("test"), 503),
            (ContentStoreQueryError("test"), 503),
            (InvalidConfigurationError("test"), 500),
            (PageFetchError("test"), 500),
            (QueryTimeoutError("test"), 500),
            (AssistantError("test"), 500),
            (ValueError("test"), 400),
            (ConnectionError("test"), 503),
            (TimeoutError("test"), 503),
            (RuntimeError("test"), 500),
        ],
    )
    def test_status_mapping(self, exc, status):
        assert get_http_status_code(exc) == status

    def test_status_comes_from_the_exception_class(self):
        class TeapotError(AssistantError):
            http_status = 418

        assert get_http_status_code(TeapotError("short and stout")) == 418
