from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.v1.api import router as api_router
from app.pages.api import router as pages_router
from app.core.config import settings
from app.db.init_db import init_db
from app.db.session import AsyncSessionLocal, engine
from app.service.IO.backfill_service import BackfillService
from app.service.IO.file_services import FileService
from contextlib import asynccontextmanager
from app.core.executor import shutdown_executor
import logging

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    FileService.create_upload_directories()
    await init_db()
    if settings.FILL_MISSING_THUMBNAILS_ON_STARTUP:
        async with AsyncSessionLocal() as db:
            await BackfillService(db).fill_missing_thumbnails()
    yield
    shutdown_executor()
    await engine.dispose()

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"]
)

app.include_router(api_router, prefix="/api/v1")
app.include_router(pages_router)

import uvicorn
if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
