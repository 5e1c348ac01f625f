import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings

# ─── Logging setup (console, plus file when LOG_DIR is set) ───
_handlers: list[logging.Handler] = [logging.StreamHandler()]
if settings.log_dir:
    _log_dir = Path(settings.log_dir)
    _log_dir.mkdir(parents=True, exist_ok=True)
    _handlers.append(
        RotatingFileHandler(
            _log_dir / "alpine-fares.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
    )

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=_handlers,
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from app.routers import airports, search

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Alpine Fares",
    description="Flexible-window round-trip search to airports near Albertville",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(search.router, prefix="/api/search", tags=["search"])
app.include_router(airports.router, prefix="/api/airports", tags=["airports"])

logger.info(
    f"Amadeus env={settings.environment}, "
    f"{'credentials configured' if settings.has_credentials else 'simulated mode'}"
)


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "alpine-fares"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
