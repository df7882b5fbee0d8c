import logging
from typing import Optional, List
import uuid

from app.core.config import settings
from app.db.repositories.bottle_repository import BottleRepository
from app.domains.bottles.entities import Bottle
from app.domains.bottles.schemas import BottleCreate, BottleUpdate
from app.domains.bottles.stats import CellarStats, compute_cellar_stats

logger = logging.getLogger(__name__)


class BottleService:
    """Сервис для работы с бутылками пользователя"""
    
    def __init__(self, bottle_repository: BottleRepository):
        self.bottle_repository = bottle_repository
    
    async def create_bottle(self, bottle_data: BottleCreate, owner_id: uuid.UUID) -> Bottle:
        """Создание новой бутылки, владелец - вызывающий пользователь"""
        bottle = Bottle.create_bottle(
            owner_id=owner_id,
            **bottle_data.model_dump()
        )
        
        created = await self.bottle_repository.create(bottle)
        logger.info(f"Bottle {created.uuid} created by {owner_id}")
        return created
    
    async def list_bottles(self, owner_id: uuid.UUID) -> List[Bottle]:
        """Все бутылки пользователя, новые первыми"""
        return await self.bottle_repository.get_by_owner(owner_id)
    
    async def update_bottle(
        self,
        bottle_uuid: uuid.UUID,
        update_data: BottleUpdate,
        user_id: uuid.UUID
    ) -> Optional[Bottle]:
        """Частичное обновление бутылки"""
        bottle = await self.bottle_repository.get_by_uuid(bottle_uuid)
        
        if not bottle:
            return None
        
        # Проверка прав доступа
        if not bottle.is_owner(user_id):
            logger.warning(f"User {user_id} denied update of bottle {bottle_uuid}")
            raise PermissionError("You don't have permission to edit this bottle")
        
        bottle.apply_update(update_data.model_dump(exclude_unset=True))
        
        updated = await self.bottle_repository.update(bottle)
        logger.info(f"Bottle {bottle_uuid} updated by {user_id}")
        return updated
    
    async def delete_bottle(self, bottle_uuid: uuid.UUID, user_id: uuid.UUID) -> Optional[Bottle]:
        """Удаление бутылки. Возвращает удалённую запись."""
        bottle = await self.bottle_repository.get_by_uuid(bottle_uuid)
        
        if not bottle:
            return None
        
        # Только владелец может удалить бутылку
        if not bottle.is_owner(user_id):
            logger.warning(f"User {user_id} denied delete of bottle {bottle_uuid}")
            raise PermissionError("Only the owner can delete this bottle")
        
        if not await self.bottle_repository.delete(bottle_uuid):
            # Запись удалили между чтением и удалением
            return None
        
        logger.info(f"Bottle {bottle_uuid} deleted by {user_id}")
        return bottle
    
    async def get_cellar_stats(self, owner_id: uuid.UUID) -> CellarStats:
        """Сводные показатели погреба пользователя"""
        bottles = await self.bottle_repository.get_by_owner(owner_id)
        return compute_cellar_stats(bottles, settings.ready_to_drink_years)
