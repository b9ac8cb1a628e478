# ============================================================================
# FILE: goonj/api/v1/endpoints/health.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session
from goonj.db.session import get_db
from goonj.schemas.envelope import MessageEnvelope, message
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/health", response_model=MessageEnvelope)
async def health_check(db: Session = Depends(get_db)):
    """Report whether the API can reach its database"""
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=500, detail="Database unreachable")
    return message("Goonj API is online")
