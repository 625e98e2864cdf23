"""
Exception handlers shared by every router.

Backend failures are not retried: an HTTP error from the leave backend is
passed through with its status code and detail, an unreachable backend is a
502, and client-side form errors are a 422 listing every problem.
"""

import logging

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from leavedash.services.leave_submission import LeaveFormError

logger = logging.getLogger(__name__)


def _backend_detail(response: httpx.Response):
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "detail" in body:
        return body["detail"]
    return body


async def backend_status_error_handler(request: Request, exc: httpx.HTTPStatusError):
    return JSONResponse(
        status_code=exc.response.status_code,
        content={"detail": _backend_detail(exc.response)}
    )


async def backend_transport_error_handler(request: Request, exc: httpx.TransportError):
    logger.error("Leave backend unreachable for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Leave service is unavailable, please try again later"}
    )


async def leave_form_error_handler(request: Request, exc: LeaveFormError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors}
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(httpx.HTTPStatusError, backend_status_error_handler)
    app.add_exception_handler(httpx.TransportError, backend_transport_error_handler)
    app.add_exception_handler(LeaveFormError, leave_form_error_handler)
