from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Database
    database_url: str

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    allowed_hosts: List[str] = ["*"]

    # Archivos
    max_image_size_mb: int = 50
    max_pdf_size_mb: int = 100

    # Seeder
    run_seeder: bool = False

    # Ventana de auditoría para /documentos/cambios
    audit_window_seconds: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
