from motor.motor_asyncio import AsyncIOMotorDatabase
from models.base import Model
from typings.student import Student

COLLECTION = "students"

# Duplicate-check key for a student record
TUPLE_FIELDS = ("name", "npm", "bid", "fak")


def students(database: AsyncIOMotorDatabase) -> Model:
    return Model(database[COLLECTION], Student)
