from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: str = "*"  # Comma-separated list, "*" = any origin

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: str = ""  # e.g. "logs/rugcheck_{time:YYYY-MM-DD}.log"; empty = stdout only

    # GoPlus Security (free tier works without a key)
    enable_goplus: bool = True  # False = offline, every check degrades to a clean record
    goplus_base_url: str = "https://api.gopluslabs.io/api/v1/token_security"
    goplus_api_key: str = ""
    goplus_timeout_sec: float = 10.0
    # Spaces request starts across the whole client, so it also paces batch
    # windows: a 5-wide window at 0.5 rps needs ~8s just to launch.
    goplus_max_rps: float = Field(default=0.5, gt=0)

    # Batch checks
    batch_concurrency: int = 5  # In-flight lookups per window
    batch_max_tokens: int = 50

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
