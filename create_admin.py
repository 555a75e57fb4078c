import asyncio
from getpass import getpass
from sqlalchemy import select
from app.database import AsyncSessionLocal
from app.models import User
from app.auth.password_security import hash_password


async def create_admin(email: str, password: str, name: str | None = None) -> User | None:
    """
    Create an admin account. Returns None if the email is already taken.
    """
    async with AsyncSessionLocal() as session:
        existing_admin = await session.execute(select(User).where(User.email == email))
        if existing_admin.scalars().first():
            return None

        admin_user = User(
            email=email,
            name=name,
            password_hash=hash_password(password)
        )
        session.add(admin_user)
        await session.commit()
        return admin_user


async def create_admin_interactive():
    """
    Interactively create a new admin user in the database.
    """
    email = input("Enter admin email: ").strip()
    name = input("Enter admin name (optional): ").strip() or None
    password = getpass("Enter admin password: ").strip()
    password_confirm = getpass("Confirm password: ").strip()

    if password != password_confirm:
        print("Passwords do not match. Exiting.")
        return

    if await create_admin(email, password, name) is None:
        print(f"Admin with email {email} already exists.")
        return
    print(f"Admin created successfully: {email}")


if __name__ == "__main__":
    asyncio.run(create_admin_interactive())
