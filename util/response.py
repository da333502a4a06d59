from enum import Enum
from typing import Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class Status(str, Enum):
    ok = "ok"
    error = "error"


def generate_response(status: Status, code: int, method: str, message: str, **extra):
    result = {
        "status": status,
        "code": code,
        "method": method,
        "message": message,
    }
    result.update(extra)
    return result


def success(code: int, payload) -> JSONResponse:
    return JSONResponse(status_code=code, content=jsonable_encoder(payload))


def error(code: int, payload, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=code, content=jsonable_encoder(payload), headers=headers
    )
