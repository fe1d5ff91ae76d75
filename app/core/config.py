from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # App
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = ""

    # Moyasar
    MOYASAR_SECRET_KEY: str = ""
    MOYASAR_PUBLISHABLE_KEY: str = ""
    MOYASAR_BASE_URL: str = "https://api.moyasar.com"
    MOYASAR_TIMEOUT: float = 30.0

    # Managed backend access tokens
    JWT_SECRET: str = ""

    # URLs
    FRONTEND_URL: str = "http://localhost:8080"
    FUNCTIONS_BASE_URL: str = "http://localhost:8000/functions/v1"

    # Site gate
    SITE_ACCESS_PASSWORD: str = ""

    @property
    def PAYMENT_STATUS_URL(self):
        return f"{self.FRONTEND_URL.rstrip('/')}/payment-status"


def get_settings() -> Settings:
    """Read settings from the environment at call time."""
    return Settings()


settings = Settings()
