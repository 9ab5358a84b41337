# mflix/core/config.py
from mflix.core.settings import settings

MONGO_URI = settings.MONGO_URI
MFLIX_NS = settings.MFLIX_NS
COMMENTS_COLLECTION = settings.COMMENTS_COLLECTION
LOG_LEVEL = settings.LOG_LEVEL
