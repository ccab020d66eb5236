"""REST 진입점 패키지 (REST entry point building blocks)."""

from zacatl.api.error_handlers import build_error_response
from zacatl.api.hook_handlers import HOOK_ORDER, HookHandler, HookHandlerName
from zacatl.api.request import HTTP_METHODS, HttpMethod, Reply, Request, to_path_template
from zacatl.api.responses import make_with_default_response
from zacatl.api.route_handlers import (
    AbstractRouteHandler,
    DeleteRouteHandler,
    GetRouteHandler,
    PatchRouteHandler,
    PostRouteHandler,
    PutRouteHandler,
    RouteSchema,
)

__all__ = [
    "HOOK_ORDER",
    "HTTP_METHODS",
    "AbstractRouteHandler",
    "DeleteRouteHandler",
    "GetRouteHandler",
    "HookHandler",
    "HookHandlerName",
    "HttpMethod",
    "PatchRouteHandler",
    "PostRouteHandler",
    "PutRouteHandler",
    "Reply",
    "Request",
    "RouteSchema",
    "build_error_response",
    "make_with_default_response",
    "to_path_template",
]
