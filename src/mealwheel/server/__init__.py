"""ASGI application factory and dependencies for the Mealwheel server."""

from mealwheel.server.app import app, create_app

__all__ = ["app", "create_app"]
