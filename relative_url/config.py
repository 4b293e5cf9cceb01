from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration"""

    app_name: str = "relative-url"

    # Cache Settings
    cache_max_size: int = Field(default=1000, gt=0)

    # Classifier Settings
    allow_protocol_relative: bool = True  # Used when a caller passes no options

    # Logging Settings
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="RELATIVE_URL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
