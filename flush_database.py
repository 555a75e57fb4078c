import asyncio
from app.database import engine, Base, AsyncSessionLocal

# Import all models so SQLAlchemy knows them
from app.models import User, Submission, Mark, FileExtension
from app.services.extensions import seed_extensions

async def flush_database():
    async with engine.begin() as conn:
        print("⚠️ Dropping all tables...")
        await conn.run_sync(Base.metadata.drop_all)
        print("✅ All tables dropped successfully!")

        print("🚀 Recreating tables...")
        await conn.run_sync(Base.metadata.create_all)
        print("✅ All tables recreated successfully!")

    # admins are dropped too; run create_admin.py again afterwards
    async with AsyncSessionLocal() as session:
        await seed_extensions(session)
        print("✅ Default file extensions restored")

if __name__ == "__main__":
    asyncio.run(flush_database())
