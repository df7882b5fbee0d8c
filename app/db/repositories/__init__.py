from app.db.repositories.user_repository import UserRepository
from app.db.repositories.bottle_repository import BottleRepository

__all__ = [
    "UserRepository",
    "BottleRepository",
]
