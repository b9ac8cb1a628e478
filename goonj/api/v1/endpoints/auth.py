# ============================================================================
# FILE: goonj/api/v1/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from goonj.db.session import get_db
from goonj.api.dependencies import require_current_user
from goonj.schemas.envelope import Envelope, success
from goonj.schemas.user import UserCreate, UserLogin, UserResponse, AuthPayload
from goonj.services.user_service import user_service
from goonj.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

def _auth_payload(user: User) -> dict:
    return {
        "token": user_service.issue_token(user),
        "token_type": "bearer",
        "user": user,
    }

@router.post("/register", response_model=Envelope[AuthPayload], status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new user account
    Returns a bearer token so the client is logged in straight away
    """
    # Check if username already exists
    if user_service.get_user_by_username(db, user_data.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered"
        )

    # Check if email already exists
    if user_service.get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        user = user_service.create_user(db, user_data)
    except Exception as e:
        logger.error(f"Register error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create user")
    return success(_auth_payload(user))

@router.post("/login", response_model=Envelope[AuthPayload])
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Login with email (or username) and password
    Returns JWT access token
    """
    user = user_service.authenticate_user(db, credentials)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials"
        )
    return success(_auth_payload(user))

@router.get("/me", response_model=Envelope[UserResponse])
async def get_current_user_info(
    current_user: User = Depends(require_current_user)
):
    """
    Get current user information
    Requires authentication
    """
    return success(current_user)
