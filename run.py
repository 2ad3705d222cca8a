import logging
import os

import uvicorn

from app.core.config import settings
from app.core.logging import configure_logging

logger = logging.getLogger("run")


def run_migrations():
    """Run Alembic migrations."""
    try:
        from alembic.config import Config
        from alembic import command

        alembic_cfg = Config("alembic.ini")
        logger.info("[STARTUP] Running database migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("[STARTUP] Migrations complete!")
        return True
    except Exception as e:
        logger.warning(f"[WARN] Migration failed: {e}")
        return False


def init_database():
    """Initialize database tables directly (fallback)."""
    from app.database import init_db
    logger.info("[STARTUP] Initializing database tables...")
    init_db()
    logger.info("[STARTUP] Database initialization complete!")


if __name__ == "__main__":
    configure_logging()

    if os.getenv("RUN_MIGRATIONS") == "true" and not run_migrations():
        logger.warning("[WARN] Falling back to direct table creation...")
        init_database()

    logger.info(f"[STARTUP] Server binding to host={settings.HOST} port={settings.PORT}")
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1,
    )
