from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.hash import pbkdf2_sha256 as hasher

from clario.auth.schemas import TokenData
from clario.models import utcnow

ALGORITHM = "HS256"


def get_password_hash(password: str) -> str:
    return hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return hasher.verify(password, password_hash)
    except (ValueError, TypeError):
        # Malformed or foreign hash format
        return False


def create_access_token(data: dict, secret_key: str, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = utcnow() + (expires_delta or timedelta(minutes=15))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def verify_token(token: str, secret_key: str, credentials_exception) -> TokenData:
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        raise credentials_exception
    email = payload.get("sub")
    if email is None:
        raise credentials_exception
    return TokenData(email=email)
