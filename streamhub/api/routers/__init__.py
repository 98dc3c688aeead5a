from . import auth_router, streams_router, view_router

__all__ = ["auth_router", "streams_router", "view_router"]
