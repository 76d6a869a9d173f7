from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DRIPFLOW_")

    app_env: str = "dev"
    log_level: str = "INFO"
    seed_on_startup: bool = True
    activity_log_limit: int = 20
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]


settings = Settings()  # reads from env
