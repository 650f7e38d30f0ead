from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Carpool"
    DATABASE_URL: str = "sqlite:///./carpool.db"
    LOG_LEVEL: str = "info"

    # JWT Config
    JWT_SECRET: str | None = None
    JWT_RESPONSE_HEADER: str = "Authorization"
    JWT_TOKEN_PREFIX: str = "Bearer "
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 14

    # Security
    PASSWORD_PEPPER: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
