import asyncio
from app.database import engine, Base, AsyncSessionLocal

# Import all models here so SQLAlchemy knows them
from app.models import User, Submission, Mark, FileExtension
from app.services.extensions import seed_extensions



async def create_tables():
    async with engine.begin() as conn:
        print("🚀 Creating database tables...")
        await conn.run_sync(Base.metadata.create_all)
        print("✅ All tables created successfully!")

    async with AsyncSessionLocal() as session:
        added = await seed_extensions(session)
        print(f"✅ Seeded {added} file extension(s)")


if __name__ == "__main__":
    asyncio.run(create_tables())
