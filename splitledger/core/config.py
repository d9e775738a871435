from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./splitledger.db"
    LOG_LEVEL: str = "INFO"
    DB_CONNECT_RETRIES: int = 5

    class Config:
        env_file = ".env"

settings = Settings()
