"""Health check router."""

import logging
from pathlib import Path
from typing import Optional

from alembic.config import Config
from alembic.script import ScriptDirectory
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.core.config import settings
from recruit.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def migration_head() -> Optional[str]:
    """Newest revision shipped in ``alembic/versions``, if the scripts are present."""
    cfg_path = PROJECT_ROOT / "alembic.ini"
    if not cfg_path.exists():
        return None
    config = Config(str(cfg_path))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return ScriptDirectory.from_config(config).get_current_head()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Database reachability and whether its schema is at the latest migration."""
    db_ok = True
    schema_revision: Optional[str] = None
    try:
        await db.execute(text("SELECT 1"))
        result = await db.execute(text("SELECT version_num FROM alembic_version"))
        schema_revision = result.scalar_one_or_none()
    except SQLAlchemyError:
        logger.warning("Health check could not read the schema revision", exc_info=True)
        await db.rollback()
        try:
            await db.execute(text("SELECT 1"))
        except SQLAlchemyError:
            db_ok = False
    
    head = migration_head()
    return {
        "app": settings.APP_NAME,
        "api_ok": True,
        "db_ok": db_ok,
        "schema_revision": schema_revision,
        "migration_head": head,
        "schema_current": bool(schema_revision and schema_revision == head),
        "mail_delivery": settings.MAIL_DELIVERY_METHOD,
    }
