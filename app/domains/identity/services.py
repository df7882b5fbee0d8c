import logging
from typing import Optional

from app.core.security import issue_access_token, read_token_subject
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserCreate, UserLogin

logger = logging.getLogger(__name__)


class IdentityService:
    """Регистрация, вход и разбор токена владельца погреба"""
    
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository
    
    async def register_user(self, user_data: UserCreate) -> User:
        if await self.user_repository.email_exists(user_data.email):
            raise ValueError("Email already registered")
        
        if await self.user_repository.username_exists(user_data.username):
            raise ValueError("Username already taken")
        
        user = User.register(
            email=user_data.email,
            username=user_data.username,
            password=user_data.password
        )
        
        created = await self.user_repository.create(user)
        logger.info(f"Registered user {created.uuid}")
        return created
    
    async def login_user(self, login_data: UserLogin) -> Optional[str]:
        """JWT при верном пароле, иначе None"""
        user = await self.user_repository.get_by_email(login_data.email)
        
        if not user or not user.authenticate(login_data.password):
            logger.info(f"Failed login for {login_data.email}")
            return None
        
        return issue_access_token(user.uuid, user.token_claims())
    
    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        user_uuid = read_token_subject(token)
        if user_uuid is None:
            return None
        
        user = await self.user_repository.get_by_uuid(user_uuid)
        
        if user is None or not user.can_sign_in:
            return None
        
        return user
