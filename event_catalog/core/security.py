from datetime import datetime, timedelta, timezone
from jose import jwt

def create_jwt(payload: dict, secret: str, expires_delta: timedelta, algorithm: str = "HS256") -> str:
    now = datetime.now(timezone.utc)
    data = payload.copy()
    data.update({"iat": int(now.timestamp()), "exp": int((now + expires_delta).timestamp())})
    return jwt.encode(data, secret, algorithm=algorithm)

def decode_jwt(token: str, secret: str, algorithm: str = "HS256") -> dict:
    return jwt.decode(token, secret, algorithms=[algorithm])
