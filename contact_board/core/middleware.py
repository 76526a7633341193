import logging
import time
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse

from .config import Config


logger = logging.getLogger(__name__)

FORM_NAMES = {
    "/todos": "to-do",
    "/contact": "contact",
}


def cors_allowed_origins() -> list[str]:
    return Config.allowed_origins()


def make_request_id(request: Request) -> str:
    return f"{int(time.time() * 1000)}-{id(request)}"


async def log_requests(request: Request, call_next: Callable):
    start_time = time.time()
    request_id = make_request_id(request)

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        form_name = FORM_NAMES.get(request.url.path) if request.method == "POST" else None
        if form_name:
            outcome = "accepted" if response.status_code < 400 else "rejected"
            logger.info(f"[{request_id}] {form_name} form {outcome} - {response.status_code} - {process_time:.2f}s")
        # Otherwise only log slow requests (>1s) or errors
        elif process_time > 1.0 or response.status_code >= 400:
            logger.info(f"[{request_id}] {request.method} {request.url.path} - {response.status_code} - {process_time:.2f}s")
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(f"[{request_id}] {request.method} {request.url.path} - ERROR: {str(e)} - {process_time:.2f}s")
        raise


async def global_exception_handler(request: Request, exc: Exception):
    request_id = make_request_id(request)
    logger.error(f"[{request_id}] Unhandled exception in {request.method} {request.url.path}: {str(exc)}", exc_info=True)

    origin = request.headers.get("origin")
    response = JSONResponse(status_code=500, content={"detail": "Internal server error"})
    if origin and origin in cors_allowed_origins():
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "*"

    return response
