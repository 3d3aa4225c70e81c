"""Main FastAPI application for the bookstore service."""

import time
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from . import __version__
from .api import accounts, auth
from .api.middleware import install_problem_details
from .config import get_config, get_web_directory
from .db.database import SessionLocal
from .infrastructure.security import configure_security
from .utils.logging_config import get_logger, initialize_logging

initialize_logging()
logger = get_logger('main')

config = get_config()

app = FastAPI(
    title=config.app.app_name,
    description=config.app.description,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware order: security headers wrap the Problem Details responses
install_problem_details(app)
configure_security(app, config)


def setup_static_files():
    """Mount the static asset directory when one is available."""
    web_dir = get_web_directory()
    if web_dir is None:
        # Fallback to relative path for development
        web_dir = Path(__file__).parent.parent.parent / "static"

    if web_dir.exists():
        app.mount("/static", StaticFiles(directory=str(web_dir)), name="static")
        logger.info(f"Serving static files from {web_dir}")
        return web_dir

    logger.warning(f"Static directory not found at {web_dir}")
    return None


setup_static_files()

app.include_router(auth.router)
app.include_router(accounts.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "bookstore", "version": __version__}


@app.get("/ready")
def readiness_check():
    """Readiness check endpoint that validates database connectivity."""
    start_time = time.time()
    checks = {"database": False}
    errors = []

    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        checks["database"] = True
    except Exception as e:
        logger.error(f"Readiness database check failed: {e}")
        errors.append(f"Database check failed: {str(e)}")
    finally:
        db.close()

    response = {
        "status": "ready" if all(checks.values()) else "not_ready",
        "service": "bookstore",
        "version": __version__,
        "checks": checks,
        "response_time_ms": round((time.time() - start_time) * 1000, 2),
    }
    if errors:
        response["errors"] = errors

    return JSONResponse(content=response, status_code=200 if all(checks.values()) else 503)


def run() -> None:
    """Run the service with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "bookstore.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.auto_reload,
        log_level=config.app.log_level.lower(),
    )
