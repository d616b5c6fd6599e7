import functools
import inspect
from enum import Enum
from http import HTTPStatus
from starlette.requests import Request
from mentorhub.common.fast_api_response_wrapper import api_response


class ApiParamName(str, Enum):
    REQUEST = "request"
    CURRENT_USER = "current_user"


def authenticate(token_roles: list[str] | None = None):
    """
    Login-check decorator for FastAPI endpoints.

    The decorator rewrites the endpoint signature so FastAPI injects the
    `Request`, then hands the endpoint the `UserContextDto` stored in
    `request.state.user` by `AuthMiddleware`. Application roles (applicant,
    mentor, partner, admin) live on the caller's profile and are checked by
    the services; `token_roles` only filters on the provider's role claim.

    Supported injectable parameters (by name):
    - `request`      → Starlette/FastAPI Request object
    - `current_user` → The authenticated UserContextDto

    Args:
        token_roles: Provider role claims allowed to call the endpoint.
            If None (default), any authenticated user may call it.

    Returns:
        The decorated async function.

    Example:
        class MentorshipController:
            def __init__(self):
                self.router = APIRouter()
                self.router.add_api_route(
                    "/mentorship/status",
                    endpoint=authenticate()(self.get_status),
                    methods=["GET"],
                )

            async def get_status(self, current_user: UserContextDto):
                ...
    """

    def decorator(func):
        sig = inspect.signature(func)
        original_params = sig.parameters

        api_params = [
            p
            for name, p in original_params.items()
            if name
            not in {ApiParamName.CURRENT_USER.value, ApiParamName.REQUEST.value}
        ]

        # FastAPI only injects the Request when it appears in the signature.
        api_params.insert(
            0,
            inspect.Parameter(
                ApiParamName.REQUEST.value,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
                annotation=Request,
            ),
        )

        @functools.wraps(func)
        async def wrapper(request: Request, *args, **kwargs):
            user = getattr(request.state, "user", None)
            if not user:
                return api_response(
                    success=False,
                    message="Unauthorized: User context missing",
                    status_code=HTTPStatus.UNAUTHORIZED,
                )

            if token_roles is not None:
                if not any(user.has_role(role) for role in token_roles):
                    return api_response(
                        success=False,
                        message="Forbidden: Insufficient permissions",
                        status_code=HTTPStatus.FORBIDDEN,
                    )

            business_kwargs = {
                k: v for k, v in kwargs.items() if k != ApiParamName.REQUEST.value
            }
            if ApiParamName.REQUEST.value in original_params:
                business_kwargs[ApiParamName.REQUEST.value] = request
            if ApiParamName.CURRENT_USER.value in original_params:
                business_kwargs[ApiParamName.CURRENT_USER.value] = user

            return await func(*args, **business_kwargs)

        wrapper.__signature__ = sig.replace(parameters=api_params)
        return wrapper

    return decorator
