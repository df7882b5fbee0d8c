from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from app.api.http.auth import get_current_user
from app.core.db import get_db
from app.db.repositories.bottle_repository import BottleRepository
from app.domains.bottles.schemas import (
    BottleCreate, BottleUpdate, BottleResponse, CellarStatsResponse
)
from app.domains.bottles.services import BottleService
from app.domains.identity.entities import User

router = APIRouter(prefix="/api/bottles", tags=["bottles"])


def get_bottle_service(db: AsyncSession = Depends(get_db)) -> BottleService:
    return BottleService(BottleRepository(db))


@router.post("", response_model=BottleResponse)
async def create_bottle(
    bottle_data: BottleCreate,
    current_user: User = Depends(get_current_user),
    bottle_service: BottleService = Depends(get_bottle_service)
):
    """Добавление бутылки"""
    return await bottle_service.create_bottle(bottle_data, current_user.uuid)


@router.get("", response_model=List[BottleResponse])
async def get_user_bottles(
    current_user: User = Depends(get_current_user),
    bottle_service: BottleService = Depends(get_bottle_service)
):
    """Все бутылки пользователя, новые первыми"""
    return await bottle_service.list_bottles(current_user.uuid)


@router.get("/stats", response_model=CellarStatsResponse)
async def get_cellar_stats(
    current_user: User = Depends(get_current_user),
    bottle_service: BottleService = Depends(get_bottle_service)
):
    """Сводка для дашборда"""
    return await bottle_service.get_cellar_stats(current_user.uuid)


@router.put("/{bottle_uuid}", response_model=BottleResponse)
async def update_bottle(
    bottle_uuid: uuid.UUID,
    update_data: BottleUpdate,
    current_user: User = Depends(get_current_user),
    bottle_service: BottleService = Depends(get_bottle_service)
):
    """Обновление бутылки"""
    try:
        bottle = await bottle_service.update_bottle(bottle_uuid, update_data, current_user.uuid)
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e)
        )
    
    if not bottle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bottle not found"
        )
    
    return bottle


@router.delete("/{bottle_uuid}", response_model=BottleResponse)
async def delete_bottle(
    bottle_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    bottle_service: BottleService = Depends(get_bottle_service)
):
    """Удаление бутылки"""
    try:
        bottle = await bottle_service.delete_bottle(bottle_uuid, current_user.uuid)
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e)
        )
    
    if not bottle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bottle not found"
        )
    
    return bottle
