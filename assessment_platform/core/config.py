from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class Settings(BaseSettings):
    # Storage settings
    DATA_DIR: str = "./data"

    # API settings
    API_PREFIX: str = "/api"

    # Assessment secret handling
    SECRET_POLICY: Literal["plain", "hashed"] = "plain"
    HASH_ITERATIONS: int = 120_000

    # CORS settings
    FRONTEND_URL: str = "http://localhost:5173"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() in ["production", "prod"]

    @property
    def allowed_origins(self) -> list:
        """Get list of allowed CORS origins."""
        if self.is_production:
            return [self.FRONTEND_URL]
        return [
            self.FRONTEND_URL,
            "http://localhost:5173",
            "http://localhost:3000",
            "http://127.0.0.1:5173",
            "http://127.0.0.1:3000"
        ]

settings = Settings()
