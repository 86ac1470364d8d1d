from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "postgres"
    db_username: str = "postgres"
    db_password: str = "secret"
    db_sslmode: str = "prefer"

    storage_backend: str = "local"
    storage_root: str = "./storage"
    storage_bucket: str = "documentos"
    storage_public_base_url: str = ""
    supabase_url: str = ""
    supabase_api_key: str = ""
    storage_timeout_seconds: int = 30

    recognition_language: str = "spa"
    pdf_engine: str = "pdfplumber"
    tesseract_cmd: str = ""
    pdf_ocr_fallback: bool = True
    pdf_ocr_dpi: int = 200

    max_upload_bytes: int = 10 * 1024 * 1024

    date_min_year: int = 2020
    date_max_year: int = 2030
    date_context_window: int = 100

    expiry_warning_days: int = 30
