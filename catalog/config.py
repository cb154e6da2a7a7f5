from typing import Literal, Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 8085

    STORE_BACKEND: Literal["memory", "mongo"] = "memory"

    # Either a full connection string, or the parts of an Atlas style URI
    MONGO_URI: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_NAME: str = "catalog"
    MONGO_COLLECTION: str = "products"
    MONGO_TIMEOUT_MS: int = 5000

    SEED_PRODUCTS: bool = False
    MAX_PAGE_SIZE: int = 100
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def mongo_url(self) -> str:
        if self.MONGO_URI:
            return self.MONGO_URI
        if not self.DB_HOST:
            raise ValueError("MONGO_URI or DB_HOST must be set for the mongo backend")
        if self.DB_USER:
            creds = f"{quote_plus(self.DB_USER)}:{quote_plus(self.DB_PASSWORD or '')}@"
        else:
            creds = ""
        return f"mongodb+srv://{creds}{self.DB_HOST}/{self.DB_NAME}"


def get_settings() -> Settings:
    return Settings()
