"""
Request middleware: session loading and the 500 error envelope.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from typing import Callable
import logging
from app.session import load_session, parse_bearer

logger = logging.getLogger(__name__)


class SessionMiddleware(BaseHTTPMiddleware):
    """Loads the session from Redis based on the Authorization header."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.session = {}
        request.state.token = None

        token = parse_bearer(request.headers.get("authorization"))
        if token:
            try:
                user_data = load_session(token)
            except Exception as e:
                # Public routes keep working when Redis is down
                logger.error(f"Session lookup failed: {e}")
                user_data = None
            request.state.token = token
            if user_data:
                request.state.session = user_data

        return await call_next(request)


class ErrorEnvelopeMiddleware(BaseHTTPMiddleware):
    """
    Turns any unhandled exception into a 500 JSON body carrying the message.
    Registered inside CORSMiddleware so error responses keep the CORS headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"API Error: {request.method} {request.url.path}")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal Server Error", "message": str(e) or e.__class__.__name__},
            )


class OptionsMiddleware(BaseHTTPMiddleware):
    """
    Answers OPTIONS on any path with an empty 204. Browser preflights never
    get here; CORSMiddleware sits outside and replies to them first.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204)
        return await call_next(request)
