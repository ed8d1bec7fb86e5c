from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    MONGODB_URI: str = "mongodb://localhost:27017/jobfinder"
    MONGODB_DB_NAME: str = "jobfinder"

    GOOGLE_API_KEY: str = ""
    LLM_MODEL: str = "gemini-2.5-flash"

    RAPIDAPI_KEY: str = ""
    JSEARCH_HOST: str = "jsearch.p.rapidapi.com"

    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    NOMINATIM_USER_AGENT: str = "AscendAI/1.0"
    # Nominatim's usage policy allows one request per second
    GEOCODE_INTERVAL_SECONDS: float = 1.0

    HTTP_TIMEOUT_SECONDS: float = 15.0

    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    PORT: int = 5000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
