from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "timeboard-api"
    jwt_audience: str = "timeboard-api"
    jwt_expires_minutes: int = 60 * 24 * 7

    log_level: str = "INFO"

    # pagination
    default_page_size: int = 50
    max_page_size: int = 200

    # deepest parent chain walked when checking for task cycles
    task_max_depth: int = 32

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_login_per_min: int = 30
    rate_limit_register_per_min: int = 10

settings = Settings()
