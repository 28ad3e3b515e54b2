"""Turns exceptions into the assistant's error bodies, log lines and HTTP statuses.

Every failure the transport or the router reports goes through here, so API
responses, CLI messages and logs share one shape: an ``error`` block (type,
``MOF_*`` code, message), the raise ``location`` and optional ``context``.
"""

import json
import logging
import traceback
from pathlib import Path
from typing import Any

from ..core.domain import GuardrailStatus, Intent
from ..core.domain.exceptions import AssistantError
from ..core.domain.utils import truncate

logger = logging.getLogger(__name__)

PYTHON_ERROR_CODE = "PYTHON_ERR"

# Queries are user input; keep log lines bounded
MAX_LOGGED_QUERY_CHARS = 200

# Statuses for exceptions that are not AssistantError, checked in order
BUILTIN_STATUS = (
    (ValueError, 400),
    (ConnectionError, 503),
    (TimeoutError, 503),
)


def _describe_builtin(exc: BaseException, include_trace: bool) -> dict[str, Any]:
    frames = traceback.extract_tb(exc.__traceback__)
    last = frames[-1] if frames else None

    body: dict[str, Any] = {
        "error": {"type": type(exc).__name__, "code": PYTHON_ERROR_CODE, "message": str(exc)},
        "location": {
            "class": "<unknown>",
            "method": last.name if last else "<unknown>",
            "file": Path(last.filename).name if last else "<unknown>",
            "line": last.lineno if last else 0,
        },
    }
    if include_trace:
        text = "".join(traceback.format_exception(exc))
        body["stack_trace"] = [line for line in text.splitlines() if line.strip()]
    return body


def describe_exception(
    exc: BaseException,
    include_trace: bool = False,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Structured description of any exception.

    Args:
        exc: The exception to describe.
        include_trace: Include the traceback (debug mode).
        context: Extra keys merged over the exception's own context.
    """
    if isinstance(exc, AssistantError):
        body = exc.to_dict(include_trace=include_trace)
    else:
        body = _describe_builtin(exc, include_trace)

    if context:
        body["context"] = {**body.get("context", {}), **context}
    return body


def error_body(
    exc: BaseException,
    *,
    include_trace: bool = False,
    summary: str | None = None,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """JSON body for a failed request, always tagged ``guardrail_status="error"``.

    ``summary`` is the apology shown to the user when the failure happened
    while answering a query.
    """
    body = describe_exception(exc, include_trace=include_trace, context=context)
    if summary is not None:
        body["summary"] = summary
    body["guardrail_status"] = GuardrailStatus.ERROR.value
    return body


def log_exception(
    exc: BaseException,
    log: logging.Logger | None = None,
    *,
    level: int = logging.ERROR,
    query: str | None = None,
    intent: Intent | None = None,
    **context: Any,
) -> None:
    """Log ``exc`` as one JSON line tied to the query being answered.

    The record also carries ``error_code`` and ``intent`` attributes, which
    the JSON log formatter lifts to top-level fields.

    Args:
        exc: The exception to log.
        log: Logger to write to (defaults to this module's).
        level: Logging level.
        query: The user query, truncated before logging.
        intent: Classified intent of the query, if known.
        **context: Other details (request path, method, ...).
    """
    if query is not None:
        context["query"] = truncate(query, MAX_LOGGED_QUERY_CHARS)
    if intent is not None:
        context["intent"] = intent.value

    payload = describe_exception(exc, include_trace=True, context=context)
    (log or logger).log(
        level,
        json.dumps(payload, default=str),
        extra={"error_code": payload["error"]["code"], "intent": context.get("intent")},
    )


def get_http_status_code(exc: BaseException) -> int:
    """HTTP status for an exception that reached the transport."""
    if isinstance(exc, AssistantError):
        return exc.http_status
    for exc_type, status in BUILTIN_STATUS:
        if isinstance(exc, exc_type):
            return status
    return 500
