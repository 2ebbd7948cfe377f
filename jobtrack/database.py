import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import DESCENDING

from jobtrack.config import MONGO_URI, DATABASE_NAME

logger = logging.getLogger(__name__)

client = None
db = None


async def connect_to_mongo():
    global client, db

    if not MONGO_URI:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    if "localhost" in MONGO_URI or "127.0.0.1" in MONGO_URI:
        logger.warning("Connecting to a LOCAL MongoDB instance")

    client = AsyncIOMotorClient(MONGO_URI)
    db = client[DATABASE_NAME]
    await client.admin.command("ping")

    # Listing is always "my jobs, newest update first"
    await db.jobs.create_index([("user_id", 1), ("updated_at", DESCENDING)])

    logger.info("Connected to MongoDB database %r", DATABASE_NAME)


async def close_mongo_connection():
    if client:
        client.close()
        logger.info("MongoDB connection closed")


def get_db():
    return db
