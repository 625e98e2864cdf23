from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Leave backend (owns leave data, approvals and notifications)
    BACKEND_API_URL: str = "http://localhost:8000/api"
    BACKEND_TIMEOUT: float = 30.0
    SESSION_COOKIE_NAME: str = "session"

    # Dashboard's own storage (UI preferences only)
    DATABASE_URL: str = "sqlite:///./leavedash.db"

    # Attachment screening at selection time
    MAX_ATTACHMENT_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_ATTACHMENT_TYPES: List[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "text/plain",
    ]
    # Leave types that cannot be submitted without an attachment
    ATTACHMENT_REQUIRED_LEAVE_TYPES: List[str] = ["公假"]

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
