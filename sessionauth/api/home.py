"""Public, logged-in and admin-only message endpoints."""

from sessionauth.schemas.auth import MessageResponse

PUBLIC_MESSAGE = "This message is public to all!"
PRIVATE_MESSAGE = "You can only see this if you are authenticated"
ADMIN_MESSAGE = "You can only see this if you are an admin"


def public_route() -> MessageResponse:
    return MessageResponse(message=PUBLIC_MESSAGE)


def guarded_route() -> MessageResponse:
    return MessageResponse(message=PRIVATE_MESSAGE)


def admin_route() -> MessageResponse:
    return MessageResponse(message=ADMIN_MESSAGE)
