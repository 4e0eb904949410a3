from korelium.core.env import load_env
load_env()
# Initialize structured logging early
from korelium.core.logging import configure_logging, get_logger
configure_logging()

import datetime
import time
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.orm import Session

from korelium.core.config import settings
from korelium.db.deps import get_db
from korelium.middleware.logging import logging_middleware

# Import routers from modules
from korelium.modules.admins.routes import router as admins_router
from korelium.modules.catalog.routes import router as catalog_router
from korelium.modules.courses.routes import router as courses_router

logger = get_logger(__name__)

app = FastAPI(title="Korelium API", description="Free online course catalog")
# Record process start time for uptime reporting
_START_TIME = time.time()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(logging_middleware)

# Create main API router
api_router = APIRouter()
api_router.include_router(catalog_router)
api_router.include_router(admins_router)
api_router.include_router(courses_router)

app.include_router(api_router, prefix="/api")

# Uploaded course images
upload_dir = Path(settings.UPLOAD_DIR)
upload_dir.mkdir(parents=True, exist_ok=True)
app.mount(
    f"/{settings.UPLOAD_URL_PREFIX.strip('/')}",
    StaticFiles(directory=upload_dir),
    name="uploads",
)


@app.get("/health")
async def health():
    """Simple health endpoint returning status, uptime, and timestamp."""
    uptime = time.time() - _START_TIME
    payload = {
        "status": "ok",
        "uptime_seconds": round(uptime, 2),
        "timestamp": datetime.datetime.utcnow().isoformat() + "Z",
    }
    return JSONResponse(content=payload)


@app.get("/db/health")
def db_health_sa(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}


logger.info("fastapi process started", upload_dir=str(upload_dir.resolve()))
