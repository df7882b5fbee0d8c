import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import uuid

from app.db.errors import PersistenceError
from app.db.models.user import User as UserModel
from app.domains.identity.entities import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Репозиторий для работы с пользователями"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def create(self, user: User) -> User:
        """Создание нового пользователя"""
        db_user = UserModel(
            uuid=user.uuid,
            email=user.email,
            username=user.username,
            password_hash=user.password_hash,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at
        )
        
        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("User with this email or username already exists")
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to create user {user.email}")
            raise PersistenceError("Failed to create user") from e
    
    async def get_by_uuid(self, user_uuid: uuid.UUID) -> Optional[User]:
        """Получение пользователя по UUID"""
        return await self._get_one(UserModel.uuid == user_uuid)
    
    async def get_by_email(self, email: str) -> Optional[User]:
        """Получение пользователя по email"""
        return await self._get_one(UserModel.email == email)
    
    async def email_exists(self, email: str) -> bool:
        """Проверка существования email"""
        return await self.get_by_email(email) is not None
    
    async def username_exists(self, username: str) -> bool:
        """Проверка существования username"""
        return await self._get_one(UserModel.username == username) is not None
    
    async def _get_one(self, condition) -> Optional[User]:
        try:
            result = await self.session.execute(select(UserModel).where(condition))
        except SQLAlchemyError as e:
            logger.exception("Failed to load user")
            raise PersistenceError("Failed to load user") from e
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None
    
    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            uuid=db_user.uuid,
            email=db_user.email,
            username=db_user.username,
            password_hash=db_user.password_hash,
            is_active=db_user.is_active,
            created_at=db_user.created_at,
            updated_at=db_user.updated_at
        )
