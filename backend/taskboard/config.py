"""Taskboard configuration: spreadsheet access, tab layout, HTTP settings."""

from typing import Literal

from pydantic_settings import BaseSettings

SheetsBackend = Literal["google", "memory"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Spreadsheet document
    google_sheet_id: str = ""
    sheets_backend: SheetsBackend = "google"  # "memory" = local dev, no Google calls

    # Service account credentials (file takes precedence over inline key)
    google_application_credentials: str = ""
    google_service_account_email: str = ""
    google_private_key: str = ""  # Literal "\n" sequences are expanded

    # Tab names
    tasks_sheet: str = "Tasks"
    task_history_sheet: str = "Task History"
    discussions_sheet: str = "Discussions Pending Feedback"
    loa_sheet: str = "LOA Tracking"
    task_rotation_sheet: str = "Task Rotation"

    # HTTP
    taskboard_api_key: str = ""  # Empty = auth disabled (dev mode)
    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    rate_limit_rpm: int = 100

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def private_key(self) -> str:
        """Private key with escaped newlines restored."""
        return self.google_private_key.replace("\\n", "\n")

    @property
    def has_google_credentials(self) -> bool:
        if self.google_application_credentials:
            return True
        return bool(self.google_service_account_email and self.google_private_key)


settings = Settings()
