"""Root of the assistant's exception hierarchy.

An :class:`AssistantError` knows three things beyond its message:

- ``error_code``: stable ``MOF_<AREA>_<NNN>`` identifier shown to API and CLI users
- ``http_status``: what the HTTP transport answers when the error reaches it
- ``site``: the function (and owning class) that raised it

The serialized form (``to_dict``) is the ``error``/``location`` body returned
by ``POST /api/ask`` and written to the logs.
"""

import inspect
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class RaiseSite:
    """Where an error was constructed."""

    owner: str
    function: str
    file: str
    line: int
    at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @classmethod
    def unknown(cls) -> "RaiseSite":
        return cls("<unknown>", "<unknown>", "<unknown>", 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.owner,
            "method": self.function,
            "file": self.file,
            "line": self.line,
            "timestamp": self.at,
        }


def _find_raise_site(exc: BaseException) -> RaiseSite:
    frame = inspect.currentframe()
    try:
        # Skip this helper, then every __init__ still running on ``exc``
        frame = frame.f_back if frame else None
        while frame is not None and frame.f_locals.get("self") is exc:
            frame = frame.f_back
        if frame is None:
            return RaiseSite.unknown()

        owner = frame.f_locals.get("self")
        return RaiseSite(
            owner=type(owner).__name__ if owner is not None else "<module>",
            function=frame.f_code.co_name,
            file=Path(frame.f_code.co_filename).name,
            line=frame.f_lineno,
        )
    finally:
        del frame


class AssistantError(Exception):
    """Base class for every error the assistant raises on purpose.

    Example:
        try:
            conn.execute(sql, params)
        except sqlite3.Error as e:
            raise ContentStoreQueryError(
                "Excerpt search failed", cause=e, context={"query": query}
            ) from e
    """

    error_code: str = "MOF_ERR_001"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Create the error.

        Args:
            message: Human-readable description, safe to show to users.
            cause: Lower-level exception being wrapped.
            context: Debugging details (url, query, intent, ...).
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = dict(context or {})
        self.site = _find_raise_site(self)

    def cause_trace(self) -> list[str]:
        """Formatted traceback of ``cause``, one entry per non-blank line."""
        if self.cause is None:
            return []
        text = "".join(traceback.format_exception(self.cause))
        return [line for line in text.splitlines() if line.strip()]

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Serialize for API error bodies and structured logs.

        Args:
            include_trace: Add the cause's traceback (debug mode only).
        """
        body: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.site.to_dict(),
        }
        if self.context:
            body["context"] = dict(self.context)
        if self.cause is not None:
            body["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
            if include_trace:
                body["stack_trace"] = self.cause_trace()
        return body
