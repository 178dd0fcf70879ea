# config/settings.py

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, validator, model_validator
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "EcoPulse"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")

    # CORS
    CORS_ORIGINS: str = ""

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if not self.CORS_ORIGINS:
            return ["*"] if self.DEBUG else []
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    # Database
    DATABASE_URL: str = "sqlite:///./ecopulse.db"
    DB_POOL_SIZE: int = Field(default=20, ge=5, le=100)
    DB_MAX_OVERFLOW: int = Field(default=30, ge=5, le=100)
    DB_POOL_RECYCLE: int = Field(default=3600, ge=300)

    # Security
    SECRET_KEY: str = Field(min_length=8)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, ge=15, le=1440)

    # Eco score weights
    SCORE_BASELINE: float = Field(default=100.0, gt=0)
    ELECTRICITY_WEIGHT: float = Field(default=0.2, ge=0)
    WATER_WEIGHT: float = Field(default=0.1, ge=0)
    WASTE_WEIGHT: float = Field(default=0.3, ge=0)
    CHART_MONTHS: int = Field(default=6, ge=1, le=24)

    # Challenges
    LEADERBOARD_DEFAULT_LIMIT: int = Field(default=50, ge=1, le=500)
    ENABLE_EXPIRY_SWEEP: bool = False
    EXPIRY_SWEEP_MINUTES: int = Field(default=60, ge=1)

    # Monitoring
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Server
    PORT: Optional[int] = Field(default=8000, ge=1, le=65535)

    @validator('SECRET_KEY')
    def validate_secrets(cls, v):
        """Ensure secrets are strong enough"""
        if len(v) < 8:
            raise ValueError('Secret keys must be at least 8 characters long')
        if len(v) < 32:
            import warnings
            warnings.warn(f"Secret key is only {len(v)} characters. Consider using at least 32 characters for production.", UserWarning)
        return v

    @validator('DATABASE_URL')
    def validate_database_url(cls, v):
        """Validate database URL format"""
        if not v.startswith(('postgresql://', 'postgresql+psycopg2://', 'sqlite:///')):
            raise ValueError('Unsupported database URL format')
        return v

    @model_validator(mode="after")
    def validate_cors_origins(self):
        """Validate CORS origins in production"""
        if self.ENVIRONMENT == "production" and ("*" in self.CORS_ORIGINS or not self.CORS_ORIGINS):
            raise ValueError("Wildcard CORS origins not allowed in production")
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
