import logging
import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables if present
load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    port: int = 5000
    database_url: str = "mongodb://localhost:27017"
    database_name: str = "luct-college"
    secret_key: str = "dev-secret-key-change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    environment: str = "development"
    cors_origins: List[str] = Field(default_factory=list)
    auth_required: bool = False
    seed_defaults: bool = True
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        if self.is_production:
            return self.cors_origins
        return ["*"]


def get_settings() -> Settings:
    origins = os.getenv("CORS_ORIGINS", "")
    return Settings(
        port=int(os.getenv("PORT", 5000)),
        database_url=os.getenv("DATABASE_URL") or os.getenv("MONGODB_URI") or "mongodb://localhost:27017",
        database_name=os.getenv("DATABASE_NAME", "luct-college"),
        secret_key=os.getenv("SECRET_KEY") or os.getenv("JWT_SECRET") or "dev-secret-key-change-me",
        environment=os.getenv("ENVIRONMENT", "development"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        auth_required=_flag("AUTH_REQUIRED", "false"),
        seed_defaults=_flag("SEED_DEFAULTS", "true"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
