from typing import Optional
from bson import ObjectId
from settings import Settings
import datetime
import jwt


def jwt_encode(
    id: str,
    name: Optional[str],
    settings: Settings,
    expires_delta: Optional[datetime.timedelta] = None,
):
    now = datetime.datetime.now(datetime.timezone.utc)
    duration = expires_delta or datetime.timedelta(days=settings.TOKEN_EXPIRE_DAYS)
    payload = {
        "iss": "mhs",
        "exp": now + duration,
        "iat": now,
        "id": id,
        "name": name,
        "jti": str(ObjectId()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def jwt_decode(token: str, settings: Settings):
    # Raises ExpiredSignatureError past `exp`, InvalidTokenError on a bad signature
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={"require": ["exp", "id"]},
    )
