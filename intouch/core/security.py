"""Password hashing, strength rules and session tokens"""

import re
from typing import List, Optional

import pendulum
from jose import JWTError, jwt
from passlib.context import CryptContext

from intouch.core.config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# (requirement key, check) in the order they are shown to the user
PASSWORD_REQUIREMENTS = (
    ("passwordMinLength", lambda pwd: len(pwd) >= 8),
    ("passwordHasUppercase", lambda pwd: re.search(r"[A-Z]", pwd) is not None),
    ("passwordHasLowercase", lambda pwd: re.search(r"[a-z]", pwd) is not None),
    ("passwordHasNumber", lambda pwd: re.search(r"\d", pwd) is not None),
    ("passwordHasSpecial", lambda pwd: re.search(r"[!@#$%^&*(),.?\":{}|<>]", pwd) is not None),
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    return pwd_context.verify(plain, hashed)


def unmet_password_requirements(password: str) -> List[str]:
    return [key for key, check in PASSWORD_REQUIREMENTS if not check(password)]


def is_password_strong(password: str) -> bool:
    return not unmet_password_requirements(password)


def create_access_token(session_id: str, expires_minutes: Optional[int] = None) -> str:
    """Issue a signed token that identifies a server-side session"""
    expire = pendulum.now("UTC").add(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {"sid": session_id, "exp": int(expire.timestamp())}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """Return the session id carried by ``token``, or None when it is invalid"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    return payload.get("sid")
