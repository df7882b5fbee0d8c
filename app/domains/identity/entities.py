import uuid
from dataclasses import dataclass, field
from datetime import datetime

from app.core.security import check_password, hash_password


@dataclass(eq=False)
class User:
    """Владелец погреба. Бутылки ссылаются на него по uuid."""
    uuid: uuid.UUID
    email: str
    username: str
    password_hash: str = field(repr=False)
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    
    @property
    def can_sign_in(self) -> bool:
        return self.is_active
    
    def authenticate(self, password: str) -> bool:
        return self.can_sign_in and check_password(password, self.password_hash)
    
    def token_claims(self) -> dict:
        """Дополнительные поля JWT помимо sub"""
        return {"username": self.username, "email": self.email}
    
    @classmethod
    def register(cls, email: str, username: str, password: str) -> "User":
        return cls(
            uuid=uuid.uuid4(),
            email=email,
            username=username,
            password_hash=hash_password(password)
        )
    
    def __eq__(self, other) -> bool:
        return isinstance(other, User) and self.uuid == other.uuid
    
    def __hash__(self) -> int:
        return hash(self.uuid)
