# app/scripts/create_admin.py
import asyncio
import os

from sqlalchemy import select

from app.core.db import AsyncSessionLocal, init_models
from app.core.security import hash_password
from app.models.user_models import User


async def create_admin():
    username = os.getenv("ADMIN_EMAIL", "admin@example.com")
    password = os.getenv("ADMIN_PASSWORD", "admin123")

    await init_models()
    async with AsyncSessionLocal() as session:
        existing = await session.execute(select(User).where(User.username == username))
        if existing.scalars().first():
            print(f"Admin '{username}' already exists")
            return

        session.add(User(
            username=username,
            password_hash=hash_password(password),
            role="admin",
            is_active=True
        ))
        await session.commit()
        print(f"Admin '{username}' created!")


if __name__ == "__main__":
    asyncio.run(create_admin())
