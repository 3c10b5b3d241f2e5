# chefai/core/config.py
# Environment settings (.env supported)
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "chefai"

    # Gemini: native REST for the proxy, OpenAI-compatible endpoint for the adapters
    GEMINI_API_KEY: str | None = None
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_OPENAI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    GEMINI_VISION_MODEL: str = "gemini-1.5-pro"
    GEMINI_TEXT_MODEL: str = "gemini-1.5-flash"
    GEMINI_PROXY_MODEL: str = "gemini-pro"

    GOOGLE_VISION_API_KEY: str | None = None

    USDA_API_KEY: str = "DEMO_KEY"
    USDA_BASE_URL: str = "https://api.nal.usda.gov/fdc/v1"
    MEALDB_BASE_URL: str = "https://www.themealdb.com/api/json/v1/1"

    HTTP_TIMEOUT: float = 30.0

    # raise MalformedResponse instead of returning fallback data
    AI_STRICT_PARSING: bool = False

    SESSION_MAX_AGE: int = 60 * 60 * 24 * 7  # 7 days
    CLIENT_URLS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
