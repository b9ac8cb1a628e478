# ============================================================================
# FILE: goonj/schemas/envelope.py
# Every endpoint answers with {status, data} or {status, message}
# ============================================================================
from pydantic import BaseModel
from typing import Generic, TypeVar

T = TypeVar("T")

SUCCESS = "success"
ERROR = "error"

class Envelope(BaseModel, Generic[T]):
    """Successful response carrying a payload"""
    status: str = SUCCESS
    data: T

class MessageEnvelope(BaseModel):
    """Response carrying only a human readable message"""
    status: str = SUCCESS
    message: str

def success(data) -> dict:
    return {"status": SUCCESS, "data": data}

def message(text: str, status: str = SUCCESS) -> dict:
    return {"status": status, "message": text}
