from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from user_proxy.logging_config import log_structured
from user_proxy.models import ErrorEnvelope


class ProxyError(Exception):
    """A failed round trip, carrying the status and envelope sent back to the caller."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(error=self.error, details=self.details)

    @property
    def allows_body(self) -> bool:
        return self.status_code >= 200 and self.status_code not in (204, 304)


def setup_exception_handlers(app: FastAPI):
    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        if not exc.allows_body:
            return Response(status_code=exc.status_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.envelope().model_dump(exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        log_structured("Unhandled exception", level="error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
