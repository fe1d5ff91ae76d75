from typing import Optional
from jose import JWTError, jwt
from app.core.config import settings

ALGORITHM = "HS256"

def verify_token(token: str, secret: Optional[str] = None):
    """Verify an access token issued by the auth backend"""
    key = secret or settings.JWT_SECRET
    if not key:
        return None
    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=[ALGORITHM],
            options={"verify_aud": False}
        )
        return payload
    except JWTError:
        return None

def create_access_token(data: dict, secret: Optional[str] = None):
    """Sign a token the same way the auth backend does (used by scripts and tests)"""
    return jwt.encode(data, secret or settings.JWT_SECRET, algorithm=ALGORITHM)
