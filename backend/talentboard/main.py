import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from talentboard.config import settings
from talentboard.database import engine, init_db
from talentboard.errors import install_error_handlers
from talentboard.routers import candidates, hotlists, jobs, uploads

logger = logging.getLogger("talentboard")

VERSION = "0.1.0"


def connect_or_exit():
    """Create tables and check the store; any failure terminates the process."""
    try:
        if settings.database_url is None:
            settings.data_dir.mkdir(parents=True, exist_ok=True)
        init_db()
    except (SQLAlchemyError, OSError) as exc:
        logger.critical("Database connection error: %s", exc)
        raise SystemExit(1) from exc
    logger.info("Connected to database %s", engine.url.render_as_string(hide_password=True))


@asynccontextmanager
async def lifespan(app: FastAPI):
    connect_or_exit()
    yield
    engine.dispose()
    logger.info("Database connection closed")


app = FastAPI(
    title="Talent Board",
    description="Job postings, candidate profiles and candidate hotlists",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

install_error_handlers(app)

app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(candidates.router, prefix=settings.api_prefix)
app.include_router(hotlists.router, prefix=settings.api_prefix)
app.include_router(uploads.router, prefix=settings.uploads_url_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}


def run():
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
