"""
Create an account from the command line. Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [--print-token]
Example:
  python -m app.scripts.create_user "Jane Doe" jane@example.com s3cret --print-token
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import SessionLocal, init_db
from app.core.security import TokenCodec
from app.schemas.users import UserCreateRequest
from app.services.user_store import UserStore
from app.services.users import EmailConflictError, UserService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account.")
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument(
        "--print-token",
        action="store_true",
        help="Also print a bearer token for the new account",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )

    try:
        data = UserCreateRequest(name=args.name, email=args.email, password=args.password)
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    codec = TokenCodec.from_settings(get_settings())
    init_db()
    db = SessionLocal()
    try:
        service = UserService(UserStore(db), codec)
        try:
            user = service.create(data)
        except EmailConflictError:
            print(f"Email '{data.email}' is already registered.", file=sys.stderr)
            return 1
        print(f"Created user {user.id} <{user.email}>.")
        if args.print_token:
            print(codec.issue(user.id))
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
