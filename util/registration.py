from typing import Optional
from pymongo.errors import DuplicateKeyError
from models.base import Model
from models.student import TUPLE_FIELDS
from settings import Settings
from util.token import jwt_encode
import logging

logger = logging.getLogger(__name__)


async def register_student(
    students: Model, fields: dict, settings: Settings
) -> tuple[dict, Optional[str]]:
    """
    Create a student unless the exact (name, npm, bid, fak) tuple exists.

    Returns (record, token). Token is None when the tuple was already
    registered and `record` is the existing one. The check and the insert
    are separate round trips, so two concurrent identical requests can both
    insert unless the unique tuple index is enabled. With the index, an
    insert rejected as a duplicate goes back to the existence check.
    """
    query = {field: fields.get(field) for field in TUPLE_FIELDS}

    while True:
        existing = await students.find_one(query)
        if existing:
            return existing, None

        try:
            created = await students.create(query)
        except DuplicateKeyError:
            # The conflicting record can be gone again by the next read
            logger.info("Duplicate student rejected by unique index: %s", query)
            continue
        break

    token = jwt_encode(created["_id"], created["name"], settings)
    return created, token
