"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        secret_key: Secret key for JWT token encoding
        algorithm: Algorithm used for JWT encoding (typically HS256)
        access_token_expire_minutes: Access token lifetime in minutes
        bcrypt_rounds: bcrypt work factor used when hashing passwords
        strict_empty_enrollment_lists: Raise not-found instead of returning
            an empty list when a program (or the store) has no enrollments
        cors_origins: Origins allowed by the CORS middleware

        # Email settings (registration confirmation is skipped when unset)
        mail_username: SMTP server username
        mail_password: SMTP server password
        mail_from: Sender email address
        mail_port: SMTP server port
        mail_server: SMTP server hostname
        mail_starttls: Whether to use STARTTLS
    """
    # Database settings
    database_url: str = "sqlite:///./clinic_programs.db"

    # JWT settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Password hashing
    bcrypt_rounds: int = 10

    # Enrollment listing behaviour
    strict_empty_enrollment_lists: bool = False

    # Frontend settings
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Email settings
    mail_username: Optional[str] = None
    mail_password: Optional[str] = None
    mail_from: Optional[str] = None
    mail_port: int = 587
    mail_server: Optional[str] = None
    mail_starttls: bool = True

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
