from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
import uuid
from datetime import datetime


class CamelModel(BaseModel):
    """camelCase на проводе, snake_case в коде"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_product(v):
    if v is None or not v.strip():
        raise ValueError('Product is required')
    return v.strip()


def _normalize_text(v):
    if v is None:
        return v
    v = v.strip()
    return v or None


class BottleFields(CamelModel):
    """Необязательные атрибуты бутылки"""
    vintage: Optional[int] = Field(None, ge=1000, le=2100)
    varietal: Optional[str] = Field(None, max_length=255)
    count: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    cost_per_bottle: Optional[float] = Field(None, ge=0)
    total_cost: Optional[float] = Field(None, ge=0)
    size: Optional[str] = Field(None, max_length=50)
    country_code: Optional[str] = Field(None, pattern=r"^[A-Za-z]{2,3}$")
    status: Optional[str] = Field(None, max_length=50)
    
    @field_validator('varietal', 'size', 'status')
    @classmethod
    def validate_text(cls, v):
        return _normalize_text(v)
    
    @field_validator('country_code', mode="before")
    @classmethod
    def blank_country_code(cls, v):
        # Пустой код очищает поле, а не проваливает проверку шаблона
        if isinstance(v, str):
            return _normalize_text(v)
        return v
    
    @field_validator('country_code')
    @classmethod
    def validate_country_code(cls, v):
        return v.upper() if v else v


class BottleCreate(BottleFields):
    """Схема для создания бутылки"""
    product: str = Field(..., max_length=255)
    
    @field_validator('product')
    @classmethod
    def validate_product(cls, v):
        return _check_product(v)


class BottleUpdate(BottleFields):
    """Схема для частичного обновления бутылки.

    Учитываются только поля, присутствующие в теле запроса
    (model_dump(exclude_unset=True)), поэтому 0 и "" тоже применяются.
    """
    product: Optional[str] = Field(None, max_length=255)
    
    @field_validator('product')
    @classmethod
    def validate_product(cls, v):
        return _check_product(v)


class BottleResponse(BottleFields):
    """Схема для ответа с данными бутылки"""
    uuid: uuid.UUID
    owner_id: uuid.UUID
    product: str
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class CellarStatsResponse(CamelModel):
    """Сводка для дашборда"""
    wine_in_cellar: int
    wine_pending: int
    wine_consumed: int
    wine_purchased: int
    ready_to_drink: int
    total_value: float
    
    model_config = ConfigDict(from_attributes=True)
