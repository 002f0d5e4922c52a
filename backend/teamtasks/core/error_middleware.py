import traceback

from teamtasks.core.logger import logger


class ExceptionLoggingMiddleware:
    """
    ASGI middleware that logs unhandled exceptions with full stack trace.

    Application errors (AppError, validation, integrity) are turned into
    responses by the exception handlers in ``teamtasks.core.errors`` and never
    reach this layer. Anything that does is re-raised after logging.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        try:
            await self.app(scope, receive, send)
        except Exception:
            logger.error(
                "Unhandled exception in request",
                extra={
                    "request_id": scope.get("request_id"),
                    "method": scope.get("method"),
                    "path": scope.get("path"),
                    "traceback": traceback.format_exc(),
                },
            )
            raise
