from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "your-secret-key"


class Settings(BaseSettings):
    # Single embedded database file, relative to the working directory
    database_url: str = "sqlite:///./data.db"
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 120  # 2 hours
    bcrypt_rounds: int = 12
    app_env: str = "development"  # development, staging, production

    # Seeded administrator account
    admin_username: str = "admin"
    admin_password: str = "changeme123"

    # CORS origins as comma-separated values, "*" for any
    cors_allow_origins: str = "*"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Catalog asset slot: <public_dir>/uploads/catalog.pdf + <public_dir>/catalog-info.json
    public_dir: str = "public"
    max_catalog_upload_mb: int = 25

    # UI translation files: <locales_dir>/<lang>.json
    locales_dir: str = "locales"
    translation_languages: str = "en,az,ru"

    # Optional override of the bundled sample products file
    seed_products_path: str | None = None

    # Failed-login lockout per client IP
    login_max_failed_attempts: int = 3
    login_attempt_window_seconds: int = 5 * 60
    login_block_seconds: int = 15 * 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
