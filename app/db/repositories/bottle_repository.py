import logging
from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
import uuid

from app.db.errors import PersistenceError
from app.db.models.bottle import Bottle as BottleModel

if TYPE_CHECKING:
    from app.domains.bottles.entities import Bottle

logger = logging.getLogger(__name__)


class BottleRepository:
    """Репозиторий для работы с бутылками.

    Любая ошибка SQLAlchemy откатывает сессию и превращается в
    PersistenceError: наверх не уходят детали хранилища.
    """
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def create(self, bottle: "Bottle") -> "Bottle":
        """Создание новой бутылки"""
        db_bottle = BottleModel(
            uuid=bottle.uuid,
            owner_id=bottle.owner_id,
            created_at=bottle.created_at,
            updated_at=bottle.updated_at,
            **bottle.get_fields()
        )
        
        self.session.add(db_bottle)
        try:
            await self.session.commit()
            await self.session.refresh(db_bottle)
        except SQLAlchemyError as e:
            await self._fail(f"create bottle for owner {bottle.owner_id}", e)
        return self._to_domain(db_bottle)
    
    async def get_by_uuid(self, bottle_uuid: uuid.UUID) -> Optional["Bottle"]:
        """Получение бутылки по UUID"""
        try:
            result = await self.session.execute(
                select(BottleModel).where(BottleModel.uuid == bottle_uuid)
            )
        except SQLAlchemyError as e:
            await self._fail(f"load bottle {bottle_uuid}", e)
        db_bottle = result.scalar_one_or_none()
        return self._to_domain(db_bottle) if db_bottle else None
    
    async def get_by_owner(self, owner_id: uuid.UUID) -> List["Bottle"]:
        """Все бутылки владельца, новые первыми"""
        try:
            result = await self.session.execute(
                select(BottleModel)
                .where(BottleModel.owner_id == owner_id)
                .order_by(BottleModel.created_at.desc(), BottleModel.uuid.desc())
            )
        except SQLAlchemyError as e:
            await self._fail(f"list bottles of owner {owner_id}", e)
        return [self._to_domain(b) for b in result.scalars().all()]
    
    async def update(self, bottle: "Bottle") -> Optional["Bottle"]:
        """Обновление бутылки. Владелец не меняется никогда."""
        stmt = (
            update(BottleModel)
            .where(BottleModel.uuid == bottle.uuid)
            .values(updated_at=bottle.updated_at, **bottle.get_fields())
        )
        
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail(f"update bottle {bottle.uuid}", e)
        
        # Результат UPDATE не должен подменяться устаревшим объектом из identity map
        self.session.expire_all()
        return await self.get_by_uuid(bottle.uuid)
    
    async def delete(self, bottle_uuid: uuid.UUID) -> bool:
        """Удаление бутылки"""
        stmt = delete(BottleModel).where(BottleModel.uuid == bottle_uuid)
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail(f"delete bottle {bottle_uuid}", e)
        return result.rowcount > 0
    
    async def _fail(self, action: str, error: SQLAlchemyError):
        await self.session.rollback()
        logger.exception(f"Failed to {action}")
        raise PersistenceError(f"Failed to {action}") from error
    
    def _to_domain(self, db_bottle: BottleModel) -> "Bottle":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.bottles.entities import Bottle
        
        return Bottle(
            uuid=db_bottle.uuid,
            owner_id=db_bottle.owner_id,
            product=db_bottle.product,
            vintage=db_bottle.vintage,
            varietal=db_bottle.varietal,
            count=db_bottle.count,
            price=db_bottle.price,
            cost_per_bottle=db_bottle.cost_per_bottle,
            total_cost=db_bottle.total_cost,
            size=db_bottle.size,
            country_code=db_bottle.country_code,
            status=db_bottle.status,
            created_at=db_bottle.created_at,
            updated_at=db_bottle.updated_at
        )
