from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:5173"]

    # Database
    database_url: str = "sqlite+aiosqlite:///./ledger.db"
    db_echo: bool = False
    auto_create_tables: bool = True

    # Import
    upload_max_size_mb: int = 10

    # Account holder name used for savings-transfer detection when no
    # setting has been stored yet.
    user_full_name: str = ""

    # Money / amounts
    currency: str = "CHF"


settings = Settings()
