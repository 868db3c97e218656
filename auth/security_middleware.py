"""Security middleware for FastAPI - session validation."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse

from auth.config import AuthConfig
from auth.session import SessionManager
from auth.exceptions import SessionExpiredError
from api.base import error_response, ErrorCodes


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that validates the operator session.

    For protected routes:
    1. Extracts session token from 'session_token' cookie
    2. Validates session via SessionManager
    3. Stores the session in request.state

    Unauthenticated API calls get a 401 JSON envelope; browser navigation
    gets a 303 redirect to the login page. Public paths bypass
    authentication entirely.
    """

    PUBLIC_PATHS = [
        "/auth/login",
        "/auth/logout",
        "/health",
        "/docs",
        "/openapi.json",
    ]

    def __init__(self, app, session_manager: SessionManager, config: AuthConfig | None = None):
        super().__init__(app)
        self._session_manager = session_manager
        self._config = config or AuthConfig()

    def _is_public_path(self, path: str) -> bool:
        """Public paths match exactly or as a parent segment, never as a bare prefix."""
        for public_path in self.PUBLIC_PATHS:
            if path == public_path or path.startswith(public_path + "/"):
                return True
        return False

    def _wants_html(self, request: Request) -> bool:
        if request.url.path.startswith("/api/"):
            return False
        return "text/html" in request.headers.get("accept", "")

    def _reject(self, request: Request, code: str, message: str):
        if self._wants_html(request):
            return RedirectResponse(self._config.login_path, status_code=303)
        return JSONResponse(
            status_code=401,
            content=error_response(code, message).model_dump(mode="json"),
        )

    async def dispatch(self, request: Request, call_next):
        """Process request through middleware."""
        if self._is_public_path(request.url.path):
            return await call_next(request)

        session_token = request.cookies.get("session_token")

        if not session_token:
            return self._reject(request, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")

        try:
            session = self._session_manager.validate_session(session_token)
        except SessionExpiredError:
            return self._reject(request, ErrorCodes.SESSION_EXPIRED, "Session has expired")

        request.state.session = session
        request.state.operator_email = session.email

        return await call_next(request)
