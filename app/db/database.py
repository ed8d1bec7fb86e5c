from pymongo import AsyncMongoClient
import logging
from beanie import Document, init_beanie
import app.schemas
from app.core.config import settings

logger = logging.getLogger(__name__)


class DBMongo:
    client: AsyncMongoClient = None


db = DBMongo()


def document_models() -> list:
    """All beanie Documents exported by app.schemas."""
    return [
        model for model in app.schemas.__dict__.values()
        if isinstance(model, type) and issubclass(model, Document)
    ]


async def connect_to_mongo() -> None:
    """Open the client, register document models and verify the connection.

    Raises on failure so the application does not start without a store.
    """
    try:
        db.client = AsyncMongoClient(settings.MONGODB_URI)
        await init_beanie(
            database=db.client[settings.MONGODB_DB_NAME],
            document_models=document_models(),
        )
        await db.client.admin.command("ping")
    except Exception:
        logger.exception("Failed to connect to MongoDB")
        if db.client is not None:
            await db.client.close()
        db.client = None
        raise

    logger.info("Connected to MongoDB database '%s'", settings.MONGODB_DB_NAME)


async def close_mongo_connection() -> None:
    if db.client is not None:
        await db.client.close()
        db.client = None
        logger.info("Closed MongoDB connection")
