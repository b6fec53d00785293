"""
Create an account from the command line (e.g. seed a business host). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD DISPLAY_NAME [role]
Example:
  python -m app.scripts.create_user host@banff.example your-secure-password "Banff Market" business
"""
import argparse
import sys

from pydantic import ValidationError

from app.core.database import SessionLocal
from app.core.errors import ServiceError
from app.schemas.auth import RegisterRequest
from app.services.accounts import register_identity


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a SummitScene account.")
    parser.add_argument("email", help="Email address (stored lower-cased)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("display_name", help="Name shown on posts")
    parser.add_argument("role", nargs="?", default="local", choices=["local", "business"])
    args = parser.parse_args(argv)

    try:
        data = RegisterRequest(
            email=args.email,
            password=args.password,
            display_name=args.display_name,
            role=args.role,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"{field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = register_identity(db, data)
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created account '{user.email}' (id={user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
