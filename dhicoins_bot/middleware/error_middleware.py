"""
Error handling middleware for the FastAPI application.
"""

import time
from typing import Callable
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with an ID and timing, and turns unhandled
    exceptions into a JSON 500 response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = f"{int(time.time() * 1000)}"
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Unhandled exception during request: {request.method} {request.url.path}",
                extra={
                    **context,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                    "process_time": f"{process_time:.3f}s",
                },
                exc_info=True,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal server error",
                    "request_id": request_id,
                },
                headers={"X-Request-ID": request_id},
            )

        process_time = time.time() - start_time
        logger.info(
            f"Request completed: {request.method} {request.url.path}",
            extra={
                **context,
                "status_code": response.status_code,
                "process_time": f"{process_time:.3f}s",
            },
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        return response
