"""Liveness and readiness probes."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.config import settings
from ledger.db.session import get_db
from ledger.repositories.transaction import TransactionRepository

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"status": "ok", "environment": settings.app_env}


@router.get("/health/ready")
async def health_ready(db: AsyncSession = Depends(get_db)):
    """Ready once the transactions table answers a query."""
    try:
        stored = await TransactionRepository(db).count()
    except SQLAlchemyError as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready", "database": "unavailable", "error": type(e).__name__},
        )
    return {"status": "ready", "database": "connected", "transactions": stored}
