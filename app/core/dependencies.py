from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import Settings, get_settings
from app.core.security import verify_token
from app.services.moyasar import MoyasarClient

security = HTTPBearer()


@dataclass
class CurrentUser:
    id: str
    role: Optional[str] = None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    config: Settings = Depends(get_settings)
):
    payload = verify_token(credentials.credentials, config.JWT_SECRET)
    if not payload or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials"
        )

    metadata = payload.get("app_metadata") or {}
    return CurrentUser(id=payload["sub"], role=metadata.get("role") or payload.get("role"))


def get_gateway(config: Settings = Depends(get_settings)) -> Optional[MoyasarClient]:
    """Gateway client for this request, or None when no secret key is configured"""
    if not config.MOYASAR_SECRET_KEY:
        return None
    return MoyasarClient(
        secret_key=config.MOYASAR_SECRET_KEY,
        base_url=config.MOYASAR_BASE_URL,
        timeout=config.MOYASAR_TIMEOUT
    )
