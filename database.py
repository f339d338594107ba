# database.py
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from bson import ObjectId
from bson.errors import InvalidId
from typing import Optional
import os
from dotenv import load_dotenv
import logging

logger = logging.getLogger(__name__)

load_dotenv()

MONGODB_URI = os.getenv("MONGODB_URI") or "mongodb://localhost:27017"
STORE_TIMEOUT_MS = int(os.getenv("STORE_TIMEOUT_MS", "10000"))

DATABASE_NAME = "school"
STUDENTS_COLLECTION = "students"

# Never produced by ObjectId(), so lookups with it match nothing
NIL_OBJECT_ID = ObjectId("0" * 24)


def create_client(uri: str = MONGODB_URI, timeout_ms: int = STORE_TIMEOUT_MS) -> AsyncIOMotorClient:
    """Build the process-wide client. Every operation is bounded by timeout_ms."""
    return AsyncIOMotorClient(uri, timeoutMS=timeout_ms)


async def connect(client: AsyncIOMotorClient) -> AsyncIOMotorCollection:
    """Check the server is reachable and return the students collection."""
    logger.info(f"Connecting to MongoDB database '{DATABASE_NAME}'")
    try:
        await client.admin.command("ping")
    except Exception as e:
        logger.critical(f"Could not connect to MongoDB: {str(e)}")
        raise
    return client[DATABASE_NAME][STUDENTS_COLLECTION]


def get_students_collection(request: Request) -> AsyncIOMotorCollection:
    return request.app.state.students_collection


def parse_object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def object_id_or_nil(value: str) -> ObjectId:
    oid = parse_object_id(value)
    return oid if oid is not None else NIL_OBJECT_ID
