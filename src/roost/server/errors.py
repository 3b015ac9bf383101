"""Error translation for roost requests.

Every exception raised while building the request view or running a
handler is classified into one of two failures and turned into exactly
one response, typed for the adapter the route was registered with.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from roost.errors import HTTPError
from roost.http.response import Response

if TYPE_CHECKING:
    from roost.adapters import Adapter
    from roost.http.request import IncomingRequest

logger = logging.getLogger("roost.server")

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


@dataclass(frozen=True, slots=True)
class ApplicationFailure:
    """An intentional error with an explicit status and message."""

    status: int
    message: str
    headers: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True, slots=True)
class UnexpectedFailure:
    """Anything else. The cause is logged, never sent to the client."""

    cause: BaseException


Failure: TypeAlias = ApplicationFailure | UnexpectedFailure


def classify(exc: BaseException) -> Failure:
    """Split an exception into an application or unexpected failure."""
    if isinstance(exc, HTTPError):
        return ApplicationFailure(
            status=exc.status,
            message=exc.detail or f"Error {exc.status}",
            headers=exc.headers,
        )
    return UnexpectedFailure(cause=exc)


def error_response(
    failure: Failure,
    adapter: Adapter,
    request: IncomingRequest,
    *,
    debug: bool = False,
) -> Response:
    """Build the response for *failure* in *adapter*'s content type.

    Application failures keep their status and message. Unexpected
    failures answer 500 with a generic message; the traceback goes to
    the ``roost.server`` logger, and into the body only when *debug*.
    """
    match failure:
        case ApplicationFailure(status=status, message=message, headers=headers):
            logger.debug("%d %s %s: %s", status, request.method, request.path, message)
            response = Response(
                body=adapter.render_error(status, message),
                status=status,
                content_type=adapter.content_type,
            )
            for name, value in headers:
                response = response.with_header(name, value)
            return response
        case UnexpectedFailure(cause=cause):
            logger.error("500 %s %s", request.method, request.path, exc_info=cause)
            message = INTERNAL_ERROR_MESSAGE
            if debug:
                message = "".join(traceback.format_exception(cause))
            return Response(
                body=adapter.render_error(500, message),
                status=500,
                content_type=adapter.content_type,
            )
