from pymongo import MongoClient

from reelmatch.config.settings import settings

# collections stay None when MONGODB_URI is unset; the DAO skips writes in that case
client = (
    MongoClient(settings.MONGODB_URI, serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS)
    if settings.persistence_enabled
    else None
)
db = client.get_database(settings.MONGODB_DB_NAME) if client is not None else None
user_preferences_collection = db["user_preferences"] if db is not None else None
user_movies_collection = db["user_movies"] if db is not None else None
movie_lists_collection = db["movie_lists"] if db is not None else None
