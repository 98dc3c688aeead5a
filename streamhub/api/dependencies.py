"""Dependency injection utilities for FastAPI"""

from fastapi import HTTPException, Request

from streamhub.controller import StreamHubController


def get_controller(request: Request) -> StreamHubController:
    """Get the viewer's controller (created in the app lifespan)."""
    controller: StreamHubController | None = getattr(request.app.state, "controller", None)
    if controller is None or not controller.started:
        raise HTTPException(status_code=503, detail="StreamHub is starting")
    return controller
