"""HTTP routes for authentication."""

import ipaddress

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from auth.config import AuthConfig
from auth.service import AuthService
from auth.types import LoginRequest
from auth.exceptions import (
    AccessDeniedError,
    InvalidCredentialsError,
    RateLimitedError,
)
from api.base import success_response, error_response, ErrorCodes


def _get_client_ip(request: Request) -> str | None:
    """Extract valid IP address from request, or None if invalid."""
    if not request.client:
        return None
    host = request.client.host
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return None


def _error(status_code: int, code: str, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content=error_response(code, message).model_dump(mode="json"),
    )


def create_auth_router(auth_service: AuthService, config: AuthConfig | None = None) -> APIRouter:
    """Create auth router with injected service."""
    config = config or AuthConfig()
    router = APIRouter(tags=["auth"])

    @router.get("/login")
    async def login_page():
        """Describe the login surface for the frontend."""
        return success_response({
            "login_path": config.login_path,
            "method": "POST",
            "fields": ["email", "password"],
        })

    @router.post("/login")
    def login(request: Request, response: Response, body: LoginRequest):
        """Log the operator in and set the session_token cookie."""
        try:
            session = auth_service.login(
                email=body.email,
                password=body.password,
                ip_address=_get_client_ip(request),
            )
        except AccessDeniedError:
            return _error(403, ErrorCodes.ACCESS_DENIED, "This account is not authorized")
        except RateLimitedError as e:
            return _error(
                429,
                ErrorCodes.RATE_LIMITED,
                f"Too many attempts. Please wait {e.retry_after_seconds} seconds.",
                headers={"Retry-After": str(e.retry_after_seconds)},
            )
        except InvalidCredentialsError:
            return _error(401, ErrorCodes.INVALID_CREDENTIALS, "Invalid email or password")

        response.set_cookie(
            key="session_token",
            value=session.token,
            httponly=True,
            secure=config.cookie_secure,
            samesite="lax",
            max_age=int((session.expires_at - session.created_at).total_seconds()),
        )

        return success_response({"email": session.email})

    @router.post("/logout")
    async def logout(request: Request, response: Response):
        """Logout - revoke session and clear cookie."""
        session_token = request.cookies.get("session_token")

        if session_token:
            auth_service.logout(session_token)

        response.delete_cookie(key="session_token")

        return success_response({"message": "Logged out successfully"})

    @router.get("/me")
    async def get_current_operator(request: Request):
        """Get current operator. Requires authentication."""
        session = getattr(request.state, "session", None)
        if session is None:
            return _error(401, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")

        return success_response({
            "email": session.email,
            "expires_at": session.expires_at.isoformat(),
        })

    return router
