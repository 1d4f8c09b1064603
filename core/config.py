from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_name: str = "postboard"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./postboard.db"
    db_create_tables: bool = True
    db_wait_retries: int = 30
    db_wait_sleep_s: float = 1.0

    upload_dir: str = "uploads"
    uploads_url_prefix: str = "/uploads"

    cors_origins: list[str] = ["*"]

settings = Settings()
