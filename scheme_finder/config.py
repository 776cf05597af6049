"""
Configuration settings for the Government Scheme Finder
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    # MongoDB Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_db_name: str = Field(default="scheme_finder")
    
    # Application Configuration
    app_name: str = Field(default="Government Scheme Finder")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=True)
    log_level: str = Field(default="INFO")
    
    # API Configuration
    api_prefix: str = Field(default="/api")
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")
    
    # Security
    admin_api_key: Optional[str] = Field(default=None, description="Key required for scheme writes")
    
    # Eligibility and catalog limits
    batch_default_limit: int = Field(default=20, ge=1)
    batch_max_limit: int = Field(default=100, ge=1)
    schemes_page_size: int = Field(default=10, ge=1)
    
    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        if ',' in self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(',')]
        return [self.cors_origins.strip()]
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()
