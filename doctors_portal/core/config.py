from pydantic_settings import BaseSettings
from typing import Optional, List
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Doctors Portal"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")
    PORT: int = 5000

    # Database
    DATABASE_URL: str = "sqlite:///./doctors_portal.db"
    TEST_DATABASE_URL: str = "sqlite://"
    DB_POOL_TIMEOUT: int = 30

    # Identity tokens
    ACCESS_TOKEN_SECRET: str = "change-this-secret-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 1

    # Appointment emails (SendGrid v3 mail API)
    EMAIL_SENDER: Optional[str] = None
    EMAIL_SENDER_KEY: Optional[str] = None
    EMAIL_API_URL: str = "https://api.sendgrid.com/v3/mail/send"
    EMAIL_TIMEOUT_SECONDS: float = 10.0

    # CORS / hosts
    ALLOWED_ORIGINS: List[str] = ["*"]
    ALLOWED_HOSTS: List[str] = ["*"]

    # Insert the default treatment catalog when the services table is empty
    SEED_DEFAULT_SERVICES: bool = True

    @property
    def get_database_url(self):
        """Return the appropriate database URL based on if we're testing"""
        if self.TESTING:
            return self.TEST_DATABASE_URL
        return self.DATABASE_URL

    @property
    def email_enabled(self) -> bool:
        return bool(self.EMAIL_SENDER and self.EMAIL_SENDER_KEY)

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
