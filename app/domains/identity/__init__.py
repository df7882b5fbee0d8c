from app.domains.identity.entities import User
from app.domains.identity.schemas import (
    UserBase, UserCreate, UserLogin, UserResponse, Token
)

__all__ = [
    "User",
    "UserBase", "UserCreate", "UserLogin", "UserResponse", "Token",
]
