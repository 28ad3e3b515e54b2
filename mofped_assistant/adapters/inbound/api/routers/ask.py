"""Ask endpoint: routes a free-text query to the assistant."""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .....common.exception_handler import error_body, log_exception
from .....config.settings import settings
from .....core.domain.exceptions import EmptyQueryError, QueryTooLongError
from .....core.domain.utils import normalize_text
from .....core.services.query_router import ERROR_SUMMARY, QueryRouter
from ..deps import enforce_rate_limit, get_query_router
from ..models import AskResponse, ErrorResponse, QueryRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ask"])


@router.post(
    "/ask",
    response_model=AskResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing, blank or over-long query"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    dependencies=[Depends(enforce_rate_limit)],
)
async def ask(
    request: QueryRequest,
    query_router: QueryRouter = Depends(get_query_router),
) -> AskResponse | JSONResponse:
    """Answer a question about the ministry.

    Args:
        request: The request containing the user's query.
        query_router: Injected query router.

    Returns:
        AskResponse with summary, sources, guardrail status and options.

    Raises:
        EmptyQueryError: If the query is missing or blank.
        QueryTooLongError: If the query exceeds the configured length.
    """
    started = time.perf_counter()

    query = normalize_text(request.query)
    if not query.strip():
        raise EmptyQueryError("Query is required")
    if len(query) > settings.max_query_length:
        raise QueryTooLongError(
            f"Query must be at most {settings.max_query_length} characters",
            context={"length": len(query)},
        )

    logger.info("Processing query: %r", query)
    try:
        response = await query_router.handle(query)
    except Exception as e:
        log_exception(e, log=logger, query=query, path="/api/ask")
        return JSONResponse(
            status_code=500,
            content=error_body(e, include_trace=settings.debug, summary=ERROR_SUMMARY),
        )

    total_ms = int((time.perf_counter() - started) * 1000)
    return AskResponse.from_response(response, total_ms)
