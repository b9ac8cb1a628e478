# ============================================================================
# FILE: goonj/services/user_service.py
# ============================================================================
from typing import Optional
from sqlalchemy.orm import Session
from goonj.db.models.user import User
from goonj.schemas.user import UserCreate, UserLogin
from goonj.core.security import get_password_hash, verify_password, create_access_token
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service layer for user operations"""

    def create_user(self, db: Session, user_data: UserCreate) -> User:
        """Create a new user account"""
        try:
            user = User(
                username=user_data.username.strip(),
                email=str(user_data.email).lower(),
                password_hash=get_password_hash(user_data.password)
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.username}")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise

    def get_user(self, db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username.strip()).first()

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == str(email).lower()).first()

    def authenticate_user(self, db: Session, credentials: UserLogin) -> Optional[User]:
        """Authenticate by email (preferred) or username plus password"""
        if credentials.email:
            user = self.get_user_by_email(db, credentials.email)
        else:
            user = self.get_user_by_username(db, credentials.username)
        if not user:
            return None
        if not verify_password(credentials.password, user.password_hash):
            logger.info(f"Failed login for user {user.username}")
            return None
        return user

    def issue_token(self, user: User) -> str:
        return create_access_token(data={"sub": user.id})

# Create singleton instance
user_service = UserService()
