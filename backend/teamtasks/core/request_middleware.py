import time

from teamtasks.core.logger import logger
from teamtasks.core.utils_logging import generate_request_id


class RequestLoggingMiddleware:
    """
    ASGI middleware that logs incoming requests and their completion,
    sets the X-Request-ID response header, and records duration.

    The request id is stored on ``scope["state"]`` so route dependencies can
    read it as ``request.state.request_id``. When authentication succeeds the
    caller id lands on ``request.state.user_id`` and is included in the
    completion line.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request_id = generate_request_id()
        scope["request_id"] = request_id
        state = scope.setdefault("state", {})
        state["request_id"] = request_id

        method = scope.get("method", "")
        path = scope.get("path", "")

        start = time.perf_counter()
        logger.info(
            "Incoming request",
            extra={"request_id": request_id, "method": method, "path": path},
        )

        status_code_container = {"status": None}

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_code_container["status"] = message.get("status", 0)

                # headers are a list of (name, value) byte pairs
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode("utf-8")))
                message["headers"] = headers

            await send(message)

        await self.app(scope, receive, send_wrapper)

        duration = time.perf_counter() - start
        extra = {
            "request_id": request_id,
            "method": method,
            "path": path,
            "status_code": status_code_container["status"],
            "duration_ms": round(duration * 1000, 2),
        }
        if state.get("user_id"):
            extra["user_id"] = state["user_id"]

        logger.info("Request completed", extra=extra)
