from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from event_catalog.core.config import settings
from event_catalog.core.security import decode_jwt

bearer = HTTPBearer(auto_error=False)

PUBLIC_ACCESS_HEADER = "X-Access-Type"
PUBLIC_ACCESS_VALUE = "Public-Preview"

def _decode_or_401(creds: HTTPAuthorizationCredentials) -> dict:
    try:
        return decode_jwt(creds.credentials, settings.AUTH_JWT_SECRET, settings.AUTH_JWT_ALGORITHM)
    except JWTError:
        raise HTTPException(status_code=401, detail="Unauthorized: invalid bearer token")

def get_optional_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> dict | None:
    if not creds:
        request.state.access_type = PUBLIC_ACCESS_VALUE
        return None
    return _decode_or_401(creds)

def get_current_principal(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> dict:
    if not creds:
        raise HTTPException(status_code=401, detail="Unauthorized: valid bearer token required")
    return _decode_or_401(creds)

def require_admin(principal: dict = Depends(get_current_principal)) -> dict:
    if str(principal.get("sub") or "") != settings.ADMIN_SUBJECT:
        raise HTTPException(status_code=403, detail="Forbidden: admins only")
    return principal
