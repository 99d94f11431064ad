"""
Application configuration via Pydantic Settings.
Loads from environment variables with validation and defaults.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # === Server ===
    server_host: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(default=8001, alias="SERVER_PORT")
    debug: bool = Field(default=False, alias="DEBUG")
    
    # === Supabase ===
    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_service_role_key: str = Field(..., alias="SUPABASE_SERVICE_ROLE_KEY")
    
    # === CORS ===
    allowed_origins: str = Field(default="*", alias="ALLOWED_ORIGINS")
    
    # === Google Drive ===
    google_api_key: Optional[str] = Field(default=None, alias="GOOGLE_API_KEY")
    drive_api_url: str = Field(
        default="https://www.googleapis.com/drive/v3/files",
        alias="DRIVE_API_URL"
    )
    drive_page_size: int = Field(default=100, ge=1, le=1000, alias="DRIVE_PAGE_SIZE")
    drive_timeout_seconds: float = Field(default=30.0, gt=0, alias="DRIVE_TIMEOUT_SECONDS")
    
    # === Galleries ===
    preview_width: int = Field(default=1000, ge=1, alias="PREVIEW_WIDTH")
    share_token_bytes: int = Field(default=6, ge=4, alias="SHARE_TOKEN_BYTES")
    
    @property
    def cors_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS into list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
