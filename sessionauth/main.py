"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.middleware.sessions import SessionMiddleware

from sessionauth.api.routes import build_router
from sessionauth.api.session import SessionAuthBackend
from sessionauth.core.config import Settings, get_settings
from sessionauth.core.errors import AuthError
from sessionauth.services.auth import AuthService
from sessionauth.services.serializer import SessionSerializer
from sessionauth.services.token_auth import (
    create_token_auth_service,
    token_auth_options_from_settings,
)
from sessionauth.stores import CredentialStore, build_credential_store
from sessionauth.stores.sessions import InMemorySessionStore

logger = logging.getLogger(__name__)


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    """Surface an auth failure as its 4xx status; the process keeps serving."""
    logger.warning(
        "Request rejected",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": exc.status_code,
            "reason": exc.message[:200],
        },
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies answer 400 with the field errors, like ValidationError."""
    logger.warning(
        "Request rejected",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": 400,
            "reason": "request validation failed",
        },
    )
    return JSONResponse(
        status_code=400,
        content={"detail": "Request validation failed.", "errors": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Settings | None = None, store: CredentialStore | None = None) -> FastAPI:
    """
    Build the app with explicit wiring: store -> auth service -> serializer -> backend.

    Middleware order (outermost first): CORS, sessions (restore the signed session-id cookie),
    authentication (deserialize the payload into request.user).
    """
    if settings is None:
        settings = get_settings()
    if store is None:
        store = build_credential_store(settings)

    auth_service = AuthService(store, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    serializer = SessionSerializer(auth_service)
    sessions = InMemorySessionStore(ttl=settings.SESSION_MAX_AGE_SEC)
    token_auth = create_token_auth_service(token_auth_options_from_settings(settings, auth_service))

    app = FastAPI(
        title="Session Auth API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.auth_service = auth_service
    app.state.serializer = serializer
    app.state.sessions = sessions
    app.state.token_auth = token_auth

    # add_middleware wraps: the last one added sees the request first.
    app.add_middleware(AuthenticationMiddleware, backend=SessionAuthBackend(serializer, sessions))
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET.get_secret_value(),
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SEC,
        same_site=settings.SESSION_SAME_SITE,
        https_only=settings.SESSION_HTTPS_ONLY,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(build_router())
    return app


app = create_app()
