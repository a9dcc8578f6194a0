# services/tutor/routers/health.py
import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from alembic.config import Config
from alembic.script import ScriptDirectory
from bank import QuizBankStore, bank_dir
from db import engine

logger = logging.getLogger("mathtutor")

router = APIRouter(prefix="/health", tags=["health"])

_ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


@router.get("/db")
def health_db():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")
    return {"ok": True, "backend": engine.dialect.name}


def alembic_heads() -> list[str]:
    script = ScriptDirectory.from_config(Config(str(_ALEMBIC_INI)))
    return list(script.get_heads())


def _db_revision() -> str | None:
    with engine.connect() as conn:
        try:
            row = conn.execute(text("SELECT version_num FROM alembic_version"))
            return row.scalar_one_or_none()
        except Exception:
            # no alembic_version table: schema was never migrated
            return None


@router.get("/migrations")
def health_migrations():
    try:
        heads = alembic_heads()
    except Exception:
        logger.exception("Could not read migration heads from %s", _ALEMBIC_INI)
        heads = []

    try:
        db_ver = _db_revision()
    except Exception as e:
        logger.warning("Migration check could not reach the database: %s", e)
        return {
            "ok": False,
            "error": f"db_connect_failed: {e}",
            "code_heads": heads,
            "db_version": None,
        }

    synced = db_ver in heads if heads else False
    if not synced:
        logger.info("Database revision %s is not at code heads %s", db_ver, heads)
    return {"ok": synced, "synced": synced, "db_version": db_ver, "code_heads": heads}


@router.get("/banks")
def health_banks():
    banks = QuizBankStore.load()
    return {
        "ok": bool(banks),
        "bank_dir": str(bank_dir()),
        "banks": len(banks),
        "assignments": len(QuizBankStore.assignments()),
    }
