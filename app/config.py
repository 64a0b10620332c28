from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # memory | sql
    STORE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite:///./receipts.db"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
