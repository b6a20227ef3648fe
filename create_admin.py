"""
Create or promote a dashboard admin and print a bearer token for it.

Usage:
    python create_admin.py admin@example.com "Site Admin"
    python create_admin.py admin@example.com "Site Admin" --reset   # drop and recreate all tables first
"""
import argparse

from sqlalchemy import select

from travel_cms.lib.db import drop_db, get_db_context, init_db
from travel_cms.lib.jwt import create_access_token
from travel_cms.models import User, UserRole


def setup_admin(email: str, name: str) -> User:
    """Insert the user, or update name/role/active flag when the email exists."""
    with get_db_context() as db:
        user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
        if user is None:
            user = User(email=email, name=name, role=UserRole.ADMIN)
            db.add(user)
            print(f"Creating admin {email}")
        else:
            user.name = name
            user.role = UserRole.ADMIN
            user.is_active = True
            print(f"Promoting existing user {email} to admin")
        db.flush()
        return user


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("email")
    parser.add_argument("name", nargs="?", default="Admin")
    parser.add_argument("--reset", action="store_true", help="drop every table before creating the schema")
    args = parser.parse_args()

    if args.reset:
        print("Resetting database...")
        drop_db()
    init_db()

    user = setup_admin(args.email, args.name)
    token = create_access_token(str(user.id), user.role.value)

    print(f"   ✅ Admin ready: {user.id}")
    print(f"\nAuthorization: Bearer {token}")


if __name__ == "__main__":
    main()
