"""
Development ASGI entry point for the mentorship backend.

This script performs the following steps:
1. Builds application dependencies via AppDependencyBuilder.
2. Replaces token verification with a fixed development identity.
3. Runs the application using Uvicorn ASGI server.

The development identity maps to the profile whose `user_id` equals
DEV_USER_SUB (defaults to "dev_superuser"); seed one to exercise the routes.
"""

import os
import uvicorn
from starlette.datastructures import Headers
from mentorhub.utils.app_dependency_builder import AppDependencyBuilder
from mentorhub.authentication.authentication_service import AuthenticationService
from mentorhub.dto.user_context_dto import UserContextDto


class DevAuthenticationService(AuthenticationService):
    """
    Authentication service used exclusively in development mode.

    This service skips real token validation and always returns the same
    development user. It should never be used in production environments.
    """

    def authenticate_request(self, headers: Headers) -> UserContextDto:
        return UserContextDto(
            sub=os.getenv("DEV_USER_SUB", "dev_superuser"),
            primary_email="admin@dev.local",
            roles=["authenticated"],
        )


# Build application dependencies
builder = AppDependencyBuilder()

# Bypass real token validation. Only use this in local development.
builder.fast_app_factory.authentication_service = DevAuthenticationService(
    logger=builder.logger
)

app = builder.fast_app_factory.create_app()

if __name__ == "__main__":
    uvicorn.run(
        "mentorhub.fast_app_dev_runner:app", host="0.0.0.0", port=5001, reload=True
    )
