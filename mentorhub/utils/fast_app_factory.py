from contextlib import asynccontextmanager
from fastapi import FastAPI
from mentorhub.common.fast_api_error_handler import register_exception_handlers
from mentorhub.utils.auth_middleware import AuthMiddleware


class FastAppFactory:
    """
    Factory class for creating and configuring the mentorship FastAPI application.

    This class encapsulates the setup of the FastAPI app, including
    routing, middleware, exception handling and database shutdown.
    """

    def __init__(
        self,
        authentication_controller,
        authentication_service,
        mentorship_controller,
        mentor_onboarding_controller,
        notification_controller,
        database=None,
    ):
        """
        Initialize the factory.

        Args:
            authentication_controller: Controller instance responsible for identity routes.
            authentication_service: AuthenticationService instance used by middleware to validate requests.
            mentorship_controller: MentorshipController exposing mentors, matches and sessions.
            mentor_onboarding_controller: MentorOnboardingController exposing mentor applications and availability.
            notification_controller: NotificationController exposing the caller's notifications.
            database: Database whose engine is disposed on shutdown, if given.
        """
        self.authentication_controller = authentication_controller
        self.authentication_service = authentication_service
        self.mentorship_controller = mentorship_controller
        self.mentor_onboarding_controller = mentor_onboarding_controller
        self.notification_controller = notification_controller
        self.database = database

    def create_app(self, is_prod: bool = False) -> FastAPI:
        """
        Create and configure a FastAPI application instance.

        This method performs the following setup steps:
            1. Initializes the FastAPI application. In production mode
               (is_prod=True), Swagger UI, ReDoc and the OpenAPI schema are disabled.
            2. Registers global exception handlers.
            3. Adds authentication middleware using AuthMiddleware.
            4. Registers the controller routes under the '/api' prefix.
            5. Adds a simple health check endpoint at '/fastapi/health'.

        Args:
            is_prod (bool): Whether the application is running in production mode.

        Returns:
            FastAPI: A fully configured FastAPI application instance.
        """
        database = self.database

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            yield
            if database is not None:
                await database.close()

        app = FastAPI(
            title="mentorhub",
            docs_url=None if is_prod else "/docs",
            redoc_url=None if is_prod else "/redoc",
            openapi_url=None if is_prod else "/openapi.json",
            lifespan=lifespan,
        )

        register_exception_handlers(app)

        app.add_middleware(AuthMiddleware, auth_service=self.authentication_service)

        app.include_router(self.authentication_controller.router, prefix="/api")
        app.include_router(self.mentorship_controller.router, prefix="/api")
        app.include_router(self.mentor_onboarding_controller.router, prefix="/api")
        app.include_router(self.notification_controller.router, prefix="/api")

        @app.get("/fastapi/health")
        def health_check():
            """
            Health check endpoint.

            Returns:
                dict: JSON containing the health status.
            """
            return {"status": "ok"}

        return app
