from typing import Optional
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel
from pymongo import ReturnDocument


def serialize(document: Optional[dict]) -> Optional[dict]:
    """
    Render a stored document as a plain record (string `_id`)
    """
    if document is None:
        return None
    document["_id"] = str(document["_id"])
    return document


class Model:
    """
    Data access over a single collection.

    Every method is one round trip to the database, without transactions
    or retries. Records come back as plain dicts, missing matches as None.
    """

    def __init__(self, collection: AsyncIOMotorCollection, schema: type[BaseModel]):
        self.collection = collection
        self.schema = schema

    async def find_all(self, filter: Optional[dict] = None) -> list[dict]:
        documents = await self.collection.find(filter or {}).to_list(None)
        return [serialize(document) for document in documents]

    async def find_one(self, filter: dict) -> Optional[dict]:
        return serialize(await self.collection.find_one(filter))

    async def find_by_id(self, id: str) -> Optional[dict]:
        # ObjectId raises InvalidId for malformed ids
        return await self.find_one({"_id": ObjectId(id)})

    async def create(self, fields: dict) -> dict:
        document = self.schema(**fields).model_dump()
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return serialize(document)

    async def update(self, filter: dict, fields: dict) -> Optional[dict]:
        if not fields:
            return await self.find_one(filter)
        document = await self.collection.find_one_and_update(
            filter, {"$set": fields}, return_document=ReturnDocument.AFTER
        )
        return serialize(document)

    async def delete(self, filter: dict) -> Optional[dict]:
        return serialize(await self.collection.find_one_and_delete(filter))
