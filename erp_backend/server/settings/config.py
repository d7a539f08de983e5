from typing import List

from pydantic import BaseModel, Field
from dotenv import load_dotenv
import os

load_dotenv()

DEFAULT_UPLOAD_SUBDIRS = ["products", "attendance", "forumDocuments", "retailers", "visitLogs"]


def _csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings(BaseModel):
    app_name: str = "ERP Backend"
    environment: str = os.getenv("ENVIRONMENT", "dev")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./erp.db")
    debug: bool = os.getenv("DEBUG", "1") == "1"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    api_prefix: str = os.getenv("API_PREFIX", "/api")
    frontend_dir: str = os.getenv("FRONTEND_DIR", "frontend")
    uploads_dir: str = os.getenv("UPLOADS_DIR", "uploads")
    upload_subdirs: List[str] = Field(default_factory=lambda: list(DEFAULT_UPLOAD_SUBDIRS))

    cors_allow_origins: List[str] = Field(default_factory=lambda: _csv(os.getenv("CORS_ALLOW_ORIGINS", "*")))
    # "prefix=modul.path:attribut,..." – routers från feature-modulerna
    feature_routers: str = os.getenv("FEATURE_ROUTERS", "")

    @classmethod
    def from_env(cls) -> "Settings":
        """Läs om miljön (defaults ovan evalueras bara vid import)."""
        return cls(
            environment=os.getenv("ENVIRONMENT", "dev"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./erp.db"),
            debug=os.getenv("DEBUG", "1") == "1",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            api_prefix=os.getenv("API_PREFIX", "/api"),
            frontend_dir=os.getenv("FRONTEND_DIR", "frontend"),
            uploads_dir=os.getenv("UPLOADS_DIR", "uploads"),
            cors_allow_origins=_csv(os.getenv("CORS_ALLOW_ORIGINS", "*")),
            feature_routers=os.getenv("FEATURE_ROUTERS", ""),
        )


settings = Settings()
