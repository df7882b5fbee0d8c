from app.db.models.user import User
from app.db.models.bottle import Bottle

__all__ = [
    "User",
    "Bottle",
]
