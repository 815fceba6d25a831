"""
Create an account in the SQL credential store (requires DATABASE_URL). Run from project root:
  python -m sessionauth.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m sessionauth.scripts.create_user admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from sessionauth.core.config import Settings, get_settings
from sessionauth.core.errors import AuthError
from sessionauth.core.security import PASSWORD_MAX_LEN
from sessionauth.schemas.auth import RegisterRequest, Role
from sessionauth.services.auth import AuthService
from sessionauth.stores import build_credential_store

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account (bypasses the HTTP API).")
    parser.add_argument("email", help="Account email (must be unique)")
    parser.add_argument("password", help="Plain-text password; stored as a bcrypt hash")
    parser.add_argument("role", nargs="?", default="user", choices=[r.value for r in Role])
    parser.add_argument("--first-name", default="")
    parser.add_argument("--last-name", default="")
    args = parser.parse_args(argv)

    settings = settings or get_settings()
    if not settings.DATABASE_URL:
        print(
            "DATABASE_URL must be set; the in-memory store does not outlive this command.",
            file=sys.stderr,
        )
        return 1

    email = args.email.strip()
    if not email or len(email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be 1-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    auth_service = AuthService(build_credential_store(settings), bcrypt_rounds=settings.BCRYPT_ROUNDS)
    try:
        user = auth_service.register_user(
            RegisterRequest(
                first_name=args.first_name,
                last_name=args.last_name,
                email=email,
                password=args.password,
                confirmation_password=args.password,
                role=Role(args.role),
            )
        )
    except AuthError as e:
        print(e.message, file=sys.stderr)
        return 1
    logger.info("Created user id=%s email=%s role=%s", user.id, user.email, user.role.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
