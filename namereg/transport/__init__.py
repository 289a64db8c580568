# Transport Layer
# FastAPI application, routes and error envelope

from namereg.transport.app import app, create_app

__all__ = ["app", "create_app"]
