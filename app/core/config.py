from pydantic_settings import BaseSettings
from typing import Literal
from pathlib import Path


class Settings(BaseSettings):
    # Server
    PORT: int = 3001
    CORS_ORIGIN: str = "*"
    # Built frontend bundle, mounted at / when present
    FRONTEND_DIST_DIR: str = "dist"

    # File storage - relative paths resolve against the working directory
    DATA_DIR: str = "data"
    WAITLIST_FILE: str = ""

    # Remote list storage
    WAITLIST_KEY: str = "waitlist:entries"
    WAITLIST_STORAGE: Literal["auto", "file", "remote"] = "auto"
    REMOTE_TIMEOUT_SECONDS: float = 10.0

    # Vercel KV / Upstash credentials, several historical naming schemes
    KV_REST_API_URL: str = ""
    KV_REST_API_TOKEN: str = ""
    KV_REST_API_READ_ONLY_TOKEN: str = ""
    UPSTASH_REDIS_REST_URL: str = ""
    UPSTASH_REDIS_REST_TOKEN: str = ""
    KV_URL: str = ""
    REDIS_URL: str = ""

    class Config:
        # Use absolute path to .env file
        env_file = Path(__file__).parent.parent.parent / ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"

    @property
    def waitlist_path(self) -> Path:
        if self.WAITLIST_FILE:
            return (Path.cwd() / self.WAITLIST_FILE).resolve()
        return (Path.cwd() / self.DATA_DIR / "waitlist.csv").resolve()


settings = Settings()
