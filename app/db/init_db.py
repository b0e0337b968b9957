from app.db.base import Base
from app.db.session import engine
# Register all models on Base.metadata
from app.models import image, thumbnail

async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
