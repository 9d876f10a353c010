from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docanalyzer"
    db_username: str = "docanalyzer"
    db_password: str = "secret"

    document_store: str = "postgres"
    upload_dir: str = "uploads"

    max_upload_size_bytes: int = 5 * 1024 * 1024
    summarize_max_file_size_bytes: int = 10 * 1024 * 1024
    allowed_file_types: str = ".pdf,.docx,.txt"
    min_text_length: int = 5

    pdf_engine: str = "pdfplumber"

    llm_provider: str = "gemini"
    llm_api_key: str = ""
    llm_model_name: str = "gemini-2.5-flash"
    llm_base_url: str = ""
    llm_temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    llm_timeout_seconds: float = 25.0
    llm_max_attempts: int = 2

    prompt_max_chars: int = 8000
    metadata_max_chars: int = 10_000
    default_max_keywords: int = 5

    @property
    def allowed_extensions(self) -> list[str]:
        """Lowercased extensions from ALLOWED_FILE_TYPES, each with a leading dot."""
        extensions = []
        for raw in self.allowed_file_types.split(","):
            ext = raw.strip().lower()
            if not ext:
                continue
            extensions.append(ext if ext.startswith(".") else f".{ext}")
        return extensions
