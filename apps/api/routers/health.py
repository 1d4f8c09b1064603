import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from apps.api.deps import get_context
from core.context import AppContext
from core.db_wait import ping

router = APIRouter()
logger = logging.getLogger("health")


@router.get("/health")
def health(ctx: AppContext = Depends(get_context)):
    try:
        ping(ctx.engine)
    except SQLAlchemyError as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse({"status": "degraded", "database": "unreachable"}, status_code=503)
    return {"status": "ok", "database": "connected"}
