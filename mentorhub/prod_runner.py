"""
ASGI entry point for the mentorship backend.

The resulting app instance is a native ASGI application that can be run
with any ASGI server.

Example usage:
    uvicorn mentorhub.prod_runner:asgi_app --host 0.0.0.0 --port 5001
"""

from mentorhub.utils.app_dependency_builder import AppDependencyBuilder


builder = AppDependencyBuilder()

asgi_app = builder.fast_app_factory.create_app(is_prod=True)
