from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from settings import Settings
from models.student import COLLECTION, TUPLE_FIELDS
import logging

logger = logging.getLogger(__name__)


class DataBase:
    client: AsyncIOMotorClient = None   # type: ignore
    database: AsyncIOMotorDatabase = None   # type: ignore


async def connect_to_mongo(db: DataBase, settings: Settings):
    logger.info("Connecting to mongo...")
    try:
        db.client = AsyncIOMotorClient(settings.MONGO_URI)
        db.database = db.client[settings.MONGO_DB]
        await db.client.admin.command("ping")
    except Exception:
        logger.exception("Failed to connect to mongo")
        raise
    if settings.ENFORCE_UNIQUE_TUPLE:
        await db.database[COLLECTION].create_index(
            [(field, ASCENDING) for field in TUPLE_FIELDS], unique=True
        )
    logger.info("connected to %s...", settings.MONGO_DB)


async def close_mongo_connection(db: DataBase):
    logger.info("closing connection...")
    if db.client is not None:
        db.client.close()
    logger.info("closed connection")


def get_database(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.db.database
