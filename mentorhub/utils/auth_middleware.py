from http import HTTPStatus
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from mentorhub.common.errors import UnauthorizedError
from mentorhub.common.fast_api_response_wrapper import api_response

PUBLIC_PATHS = frozenset({"/fastapi/health", "/docs", "/redoc", "/openapi.json"})


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware for authenticating incoming HTTP requests.

    Features:
        1. Delegates bearer-token verification to `AuthenticationService`.
        2. Adds `request.state.user` containing:
            - sub: The auth provider's subject identifier
            - primary_email: User's email
            - roles: The provider's role claim
        3. Returns a standardized API response on authentication failure using `api_response`.

    The health check and API documentation paths are served without a token.

    Usage:
        app.add_middleware(AuthMiddleware, auth_service=auth_service)

    Exception Handling:
        - UnauthorizedError: Returns HTTP 401 UNAUTHORIZED with the error message.
        - Other exceptions: Returns HTTP 403 FORBIDDEN with "Authentication failed".
    """

    def __init__(self, app, auth_service):
        super().__init__(app)
        self.auth_service = auth_service

    async def dispatch(self, request: Request, call_next):
        """
        Validate the request's token and attach the user context to `request.state.user`.

        Args:
            request (Request): The incoming FastAPI request object.
            call_next (Callable): The next middleware or route handler to call.

        Returns:
            Response: The response returned by the next handler, or an error response
                    if authentication fails.
        """
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        try:
            user_context = self.auth_service.authenticate_request(request.headers)
            request.state.user = user_context

        except UnauthorizedError as e:
            return api_response(
                success=False,
                message=str(e),
                status_code=HTTPStatus.UNAUTHORIZED,
            )
        except Exception:
            return api_response(
                success=False,
                message="Authentication failed",
                status_code=HTTPStatus.FORBIDDEN,
            )

        return await call_next(request)
