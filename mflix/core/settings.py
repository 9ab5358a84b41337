# mflix/core/settings.py
from pydantic_settings import BaseSettings
import os
from dotenv import load_dotenv
load_dotenv()  # This will load variables from a .env file in the current directory


class Settings(BaseSettings):
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MFLIX_NS: str = os.getenv("MFLIX_NS", "sample_mflix")
    COMMENTS_COLLECTION: str = "comments"
    LOG_LEVEL: str = "INFO"


settings = Settings()
