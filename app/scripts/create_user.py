"""
Create a user account from the command line. Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD
Example:
  python -m app.scripts.create_user "Ana" ana@example.com your-secure-password
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal, init_db
from app.core.errors import StoreError, ValidationError
from app.services.auth import AuthService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Persona Hub user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Login email (must be unused)")
    parser.add_argument("password", help="Password")
    args = parser.parse_args(argv)

    if get_settings().DB_CREATE_TABLES:
        init_db()
    try:
        result = AuthService(SessionLocal).signup(args.name, args.email, args.password)
    except ValidationError as e:
        print(e.message, file=sys.stderr)
        return 1
    except StoreError as e:
        logger.error("Could not create user: %s", e.message)
        return 1
    print(f"Created user {result.user.id} <{result.user.email}>.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
