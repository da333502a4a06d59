from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from bson import ObjectId
from settings import Settings
from util.token import jwt_decode
import jwt


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/mhs/create")


def validate_object_id(id: str):
    try:
        _id = ObjectId(id)
    except Exception:
        raise HTTPException(status_code=400, detail="Invalid Object ID")
    return _id


def get_app_settings(request: Request) -> Settings:
    """
    Settings the running app was built with
    """
    return request.app.state.settings


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_app_settings),
):
    """
    Used with Depends, returns {id, name} of the bearer token
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt_decode(token, settings)
    except jwt.PyJWTError:
        raise credentials_exception

    return {
        "id": payload["id"],
        "name": payload.get("name", None),
    }
