"""Runtime configuration read from the environment and an optional .env file."""
import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_API_URL = "http://localhost:5000/api/expenses"


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5000
    mongodb_uri: str = DEFAULT_MONGODB_URI
    db_name: str = "expense_tracker"
    collection_name: str = "expenses"
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    rate_limit: Optional[str] = None
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from environment variables, loading ``.env`` first."""
        if load_env_file:
            load_dotenv()  # searches current dir and parents

        port_raw = os.getenv("PORT", "5000")
        try:
            port = int(port_raw)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port_raw!r}") from None

        mongodb_uri = os.getenv("MONGODB_URI")
        if not mongodb_uri:
            logger.warning(f"MONGODB_URI not set, falling back to {DEFAULT_MONGODB_URI}.")
            mongodb_uri = DEFAULT_MONGODB_URI

        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
            mongodb_uri=mongodb_uri,
            db_name=os.getenv("DB_NAME", "expense_tracker"),
            collection_name=os.getenv("COLLECTION_NAME", "expenses"),
            environment=os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=origins or ["*"],
            rate_limit=os.getenv("RATE_LIMIT") or None,
            api_url=os.getenv("EXPENSES_API_URL", DEFAULT_API_URL).rstrip("/"),
        )
