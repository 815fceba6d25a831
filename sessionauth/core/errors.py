"""Error taxonomy for auth operations; each maps to one 4xx status at the HTTP boundary."""


class AuthError(Exception):
    """Base class for client-input failures raised by stores, services and guards."""

    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AuthError):
    """Malformed or mismatched input (e.g. password confirmation mismatch)."""

    status_code = 400


class AuthenticationError(AuthError):
    """Bad credentials or an unusable token."""

    status_code = 401


class AuthorizationError(AuthError):
    """Guard rejection: no session, or insufficient role."""

    status_code = 403


class NotFoundError(AuthError):
    status_code = 404


class ConflictError(AuthError):
    """Duplicate unique key (email)."""

    status_code = 409
