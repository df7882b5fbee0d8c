from datetime import datetime, timedelta
from typing import Optional, Dict, Any
import uuid

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt учитывает только первые 72 байта пароля
BCRYPT_MAX_BYTES = 72


def _bcrypt_secret(password: str) -> bytes:
    # Обрезаем по байтам UTF-8, а не по символам
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return pwd_context.hash(_bcrypt_secret(password))


def check_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(_bcrypt_secret(password), password_hash)


def issue_access_token(
    user_id: uuid.UUID,
    claims: Optional[Dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """JWT для владельца погреба; sub - UUID пользователя"""
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = dict(claims or {})
    payload.update({"sub": str(user_id), "exp": datetime.utcnow() + lifetime})
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def read_token_subject(token: str) -> Optional[uuid.UUID]:
    """UUID из валидного токена или None, если токен плохой или просрочен"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return uuid.UUID(str(payload.get("sub")))
    except (JWTError, ValueError):
        return None
