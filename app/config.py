from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # 🎯 Application
    APP_NAME: str = "Mediashare Revenue API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False  # ⚠️ CRITICAL: Must be False in production
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440

    # 🌐 Server
    HOST: str = '0.0.0.0'
    PORT: int = 8000

    # 🗄️ Database - PostgreSQL
    DATABASE_URL: str  # ⚠️ must come from env
    DB_ECHO: bool = False
    DB_TIMEZONE: Optional[str] = None  # Postgres session timezone, server default when unset

    # 🔒 CORS
    ALLOWED_ORIGINS: str  # ⚠️ must come from env with production domains

    # 📊 Analytics
    # Month windows follow the host's local clock unless a zone is given here
    ANALYTICS_TIMEZONE: Optional[str] = None
    CURRENCY: str = "TZS"

    # 🔐 Security Headers
    HTTPS_ONLY: bool = True

    # 📊 Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = 'ignore'

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(',')]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

settings = Settings()
