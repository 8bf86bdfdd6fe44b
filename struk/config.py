"""Application configuration management."""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google Cloud Platform - Vertex AI
    gcp_project_id: Optional[str] = None
    gcp_location: str = "us-central1"  # Default Vertex AI location
    gemini_model: str = "gemini-2.5-flash-lite"
    google_application_credentials: Optional[str] = None

    # Set to false to force rule-based extraction only
    ai_enabled: bool = True
    # Send the receipt photo along with the OCR text
    ai_vision: bool = False

    # OCR Configuration
    ocr_language: str = "ind"  # Tesseract traineddata for Indonesian
    tesseract_cmd: Optional[str] = None
    ocr_binarize: bool = False
    # PDF pages are rendered at 72 dpi * scale
    pdf_render_scale: float = 3.0

    # Printing
    store_name: str = "SA CELL"
    default_admin_fee: int = 3000
    rawbt_fallback_url: str = ""

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment.lower() == "production"

    @property
    def ai_available(self) -> bool:
        """Gemini parsing needs a GCP project and the feature switch on."""
        return self.ai_enabled and bool(self.gcp_project_id)

    @property
    def credentials_path(self) -> Optional[Path]:
        """Get Path object for credentials file."""
        if not self.google_application_credentials:
            return None
        return Path(self.google_application_credentials)

    def validate_credentials(self) -> bool:
        """Check if credentials file exists."""
        path = self.credentials_path
        return path is not None and path.exists()


# Global settings instance
settings = Settings()
