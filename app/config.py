"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

DEFAULT_JWT_SECRET = "change-me"


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class StorageBackendType(str, Enum):
    """Where uploaded meal images are kept"""

    LOCAL = "local"
    IMAGEKIT = "imagekit"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="GutCheck", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5000, ge=1, le=65535, description="Server port")

    # MongoDB settings
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    mongo_db_name: str = Field(default="gutcheck", description="MongoDB database name")
    db_init_attempts: int = Field(
        default=5, ge=1, description="Database connection retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB connection attempts"
    )

    # Authentication
    jwt_secret: str = Field(
        default=DEFAULT_JWT_SECRET, description="Secret used to sign access tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expire_days: int = Field(
        default=7, ge=1, description="Access token lifetime in days"
    )
    password_hash_rounds: int = Field(
        default=10, ge=4, le=31, description="bcrypt cost factor"
    )

    # Attachment storage
    storage_backend: StorageBackendType = Field(
        default=StorageBackendType.LOCAL, description="Image storage backend"
    )
    uploads_dir: str = Field(
        default="uploads", description="Root directory for locally stored images"
    )
    uploads_url_path: str = Field(
        default="/uploads", description="URL path serving locally stored images"
    )
    public_base_url: str = Field(
        default="", description="Absolute base URL prepended to local image URLs"
    )
    upload_max_files: int = Field(
        default=10, ge=1, description="Maximum images per request"
    )
    upload_max_file_size_mb: int = Field(
        default=100, ge=1, description="Maximum size of a single image in MB"
    )
    attachment_workers: int = Field(
        default=4, ge=1, description="Threads used for parallel storage calls"
    )

    # Remote image service (storage_backend=imagekit)
    image_service_private_key: Optional[str] = Field(
        default=None, description="Private API key for the image service"
    )
    image_service_upload_url: str = Field(
        default="https://upload.imagekit.io/api/v1/files/upload",
        description="Image service upload endpoint",
    )
    image_service_api_url: str = Field(
        default="https://api.imagekit.io/v1",
        description="Image service management API base URL",
    )
    image_service_folder: str = Field(
        default="/gutcheck", description="Root folder for uploaded images"
    )
    image_service_timeout: float = Field(
        default=30.0, gt=0, description="Image service request timeout in seconds"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=False, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="/api", description="API route prefix")
    api_title: str = Field(
        default="GutCheck API", description="API documentation title"
    )
    api_description: str = Field(
        default="Meal and digestive symptom journal with photo attachments",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("storage_backend", mode="before")
    @classmethod
    def validate_storage_backend(cls, v):
        if isinstance(v, str):
            return StorageBackendType(v.lower())
        return v

    @property
    def upload_max_file_size(self) -> int:
        """Per-file upload ceiling in bytes"""
        return self.upload_max_file_size_mb * 1024 * 1024

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    def check_runtime(self) -> None:
        """Refuse configurations that cannot serve traffic safely."""
        if self.is_production() and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise RuntimeError("JWT_SECRET must be set in production")
        if (
            self.storage_backend == StorageBackendType.IMAGEKIT
            and not self.image_service_private_key
        ):
            raise RuntimeError(
                "IMAGE_SERVICE_PRIVATE_KEY is required when STORAGE_BACKEND=imagekit"
            )


# Global settings instance
settings = Settings()
