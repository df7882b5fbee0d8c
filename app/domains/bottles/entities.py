import uuid
from datetime import datetime
from typing import Any, Dict, Optional

# Поля, которые владелец может менять после создания
MUTABLE_FIELDS = (
    "product",
    "vintage",
    "varietal",
    "count",
    "price",
    "cost_per_bottle",
    "total_cost",
    "size",
    "country_code",
    "status",
)


class Bottle:
    """Сущность бутылки домена Bottles"""
    
    def __init__(
        self,
        uuid: uuid.UUID,
        owner_id: uuid.UUID,
        product: str,
        vintage: Optional[int] = None,
        varietal: Optional[str] = None,
        count: Optional[int] = None,
        price: Optional[float] = None,
        cost_per_bottle: Optional[float] = None,
        total_cost: Optional[float] = None,
        size: Optional[str] = None,
        country_code: Optional[str] = None,
        status: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.owner_id = owner_id
        self.product = product
        self.vintage = vintage
        self.varietal = varietal
        self.count = count
        self.price = price
        self.cost_per_bottle = cost_per_bottle
        self.total_cost = total_cost
        self.size = size
        self.country_code = country_code
        self.status = status
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or self.created_at
    
    def is_owner(self, user_id: uuid.UUID) -> bool:
        """Проверка, является ли пользователь владельцем"""
        return self.owner_id == user_id
    
    def apply_update(self, fields: Dict[str, Any]) -> None:
        """Частичное обновление: меняются только переданные поля.

        Явно переданные 0 и "" тоже записываются. Владелец и
        идентификатор не меняются, неизвестные ключи игнорируются.
        """
        for name, value in fields.items():
            if name in MUTABLE_FIELDS:
                setattr(self, name, value)
        self.updated_at = datetime.utcnow()
    
    def get_fields(self) -> Dict[str, Any]:
        """Изменяемые поля в виде словаря"""
        return {name: getattr(self, name) for name in MUTABLE_FIELDS}
    
    @classmethod
    def create_bottle(cls, owner_id: uuid.UUID, product: str, **fields) -> "Bottle":
        """Создание новой бутылки"""
        return cls(
            uuid=uuid.uuid4(),
            owner_id=owner_id,
            product=product,
            **{k: v for k, v in fields.items() if k in MUTABLE_FIELDS and k != "product"}
        )
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, Bottle):
            return False
        return self.uuid == other.uuid
    
    def __repr__(self) -> str:
        return f"Bottle(uuid={self.uuid}, product={self.product}, owner_id={self.owner_id})"
