# ============================================================================
# FILE: goonj/client/auth.py
# ============================================================================
import asyncio
from typing import Dict, Optional
from pydantic import ValidationError
from goonj.client.storage import LocalStorage, TOKEN_KEY, USER_KEY
from goonj.schemas.user import UserResponse
import logging

logger = logging.getLogger(__name__)

class AuthSession:
    """
    Explicit auth context handed to whatever needs the caller's identity
    Holds the bearer token and profile, mirrored into local storage
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self.token: Optional[str] = None
        self.user: Optional[UserResponse] = None
        self.is_loading = True

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user)

    def headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def load(self) -> bool:
        """Restore a previous login from storage; True when one was found"""
        try:
            stored_token = await asyncio.to_thread(self.storage.get_item, TOKEN_KEY)
            stored_user = await asyncio.to_thread(self.storage.get_json, USER_KEY)
            if stored_token and stored_user:
                self.user = UserResponse.model_validate(stored_user)
                self.token = stored_token
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to load auth data: {e}")
            self.token = None
            self.user = None
        finally:
            self.is_loading = False
        return self.is_authenticated

    async def login(self, token: str, user: UserResponse) -> None:
        self.token = token
        self.user = user
        await asyncio.to_thread(self.storage.set_item, TOKEN_KEY, token)
        await asyncio.to_thread(self.storage.set_json, USER_KEY, user.model_dump(mode="json"))
        logger.info(f"Logged in as {user.username}")

    async def logout(self) -> None:
        self.token = None
        self.user = None
        await asyncio.to_thread(self.storage.remove_item, TOKEN_KEY)
        await asyncio.to_thread(self.storage.remove_item, USER_KEY)
        logger.info("Logged out")
