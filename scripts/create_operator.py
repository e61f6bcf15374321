# ============================================================================
# Create Operator User
# ============================================================================
"""
Script to create an operator account, or promote an existing one.

Usage:
    python scripts/create_operator.py --username admin --email admin@arcades4friends.com --password SecurePass123
"""

import asyncio
import argparse
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.database import async_session_maker, engine, Base
from app.core.security import get_password_hash
from app.models.user import User

async def create_operator(username: str, email: str, password: str):
    """Create an operator user"""
    from sqlalchemy import select

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as db:
        result = await db.execute(
            select(User).where(User.email == email.lower())
        )
        existing = result.scalar_one_or_none()

        if existing:
            print(f"User with email {email} already exists")
            existing.is_operator = True
            existing.password_hash = get_password_hash(password)
            await db.commit()
            print(f"Promoted {existing.username} to operator")
        else:
            user = User(
                username=username,
                email=email.lower(),
                password_hash=get_password_hash(password),
                is_operator=True,
                verified_email=True,
            )
            db.add(user)
            await db.commit()
            print(f"Created operator user: {email}")

    await engine.dispose()

def main():
    parser = argparse.ArgumentParser(description="Create operator user")
    parser.add_argument("--username", required=True, help="Username")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--password", required=True, help="Password")

    args = parser.parse_args()
    asyncio.run(create_operator(args.username, args.email, args.password))

if __name__ == "__main__":
    main()
