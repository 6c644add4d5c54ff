# backend/app/core/middleware.py
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class ManagementCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that leaves one path prefix alone.

    The mock API answers preflight requests and sets its own CORS headers, so
    requests below ``excluded_prefix`` go straight to the application.
    """

    def __init__(self, app: ASGIApp, excluded_prefix: str, **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.excluded_prefix = excluded_prefix.rstrip("/")

    def is_excluded(self, path: str) -> bool:
        return path == self.excluded_prefix or path.startswith(self.excluded_prefix + "/")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and self.is_excluded(scope["path"]):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
