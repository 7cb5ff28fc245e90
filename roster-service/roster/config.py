from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./roster.db"
    REDIS_URL: str = "redis://localhost:6379/0"
    STORAGE_BACKEND: str = "sql"  # "sql", "redis" or "memory"
    ROSTER_KEY: str = "students"
    REDIS_KEY_PREFIX: str = "roster:"
    LOG_LEVEL: str = "INFO"
    COURSE_FETCH_DELAY: float = 0.8  # seconds
    COURSE_FETCH_FAILURE_RATE: float = 0.1

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
