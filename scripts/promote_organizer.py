#!/usr/bin/env python3
"""
Organizer promotion script.

New users always sign up as participants, so the first organizer has to
be promoted from the command line. Later promotions can go through
``PATCH /users/{email}/type``.
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from medicamp.auth import get_user_by_email  # noqa: E402
from medicamp.database import (  # noqa: E402
    async_session_maker,
    close_db,
    create_db_and_tables,
)
from medicamp.models import User, UserType  # noqa: E402


async def promote(email: str, create: bool) -> int:
    await create_db_and_tables()
    try:
        async with async_session_maker() as session:
            user = await get_user_by_email(session, email)
            if user is None:
                if not create:
                    print(f"No user with email {email} (use --create to add one)")
                    return 1
                user = User(email=email, type=UserType.ORGANIZER)
                session.add(user)
                print(f"Created organizer {email}")
            elif user.is_organizer:
                print(f"{email} is already an organizer")
                return 0
            else:
                user.type = UserType.ORGANIZER
                print(f"Promoted {email} to organizer")
            await session.commit()
        return 0
    finally:
        await close_db()


def main():
    parser = argparse.ArgumentParser(description="Promote a user to organizer")
    parser.add_argument("--email", required=True, help="Email of the user to promote")
    parser.add_argument(
        "--create",
        action="store_true",
        help="Create the user if it does not exist yet",
    )
    args = parser.parse_args()

    sys.exit(asyncio.run(promote(args.email, args.create)))


if __name__ == "__main__":
    main()
