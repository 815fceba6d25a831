"""Dependencies resolving the services built by create_app (stored on app.state)."""

from fastapi import Request

from sessionauth.core.config import Settings
from sessionauth.services.auth import AuthService
from sessionauth.services.serializer import SessionSerializer
from sessionauth.services.token_auth import TokenAuthService
from sessionauth.stores.sessions import InMemorySessionStore


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_serializer(request: Request) -> SessionSerializer:
    return request.app.state.serializer


def get_token_auth(request: Request) -> TokenAuthService:
    return request.app.state.token_auth


def get_session_store(request: Request) -> InMemorySessionStore:
    return request.app.state.sessions
