"""Health check API routes"""

import time
from typing import Any
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text
from sqlalchemy.engine import Engine

from ..core.database import get_engine, get_connection

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check(engine: Engine = Depends(get_engine)) -> dict[str, Any]:
    """Health check endpoint.

    Returns:
        dict containing health status and database round-trip time.

    Raises:
        HTTPException: 503 if the database cannot be reached.
    """
    try:
        start = time.time()
        with get_connection(engine) as conn:
            conn.execute(text("SELECT 1"))
        latency_ms = (time.time() - start) * 1000
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Database error: {str(e)}")

    return {
        "status": "healthy",
        "database": engine.dialect.name,
        "db_latency_ms": round(latency_ms, 1),
    }
