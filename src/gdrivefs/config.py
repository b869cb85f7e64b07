from pathlib import Path
from pydantic import model_validator
from pydantic_settings import BaseSettings
from typing import Optional
import logging
from functools import lru_cache

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """
    Centralized application configuration with type validation.
    Automatically reads variables from the environment.
    """

    LOG_LEVEL: str = "INFO"

    # --- Google Drive credentials ---
    # Client secrets (client_id, client_secret) and the authorized-user token.
    GDRIVE_CREDENTIALS_JSON: Optional[str] = None
    GDRIVE_TOKEN_JSON: Optional[str] = None

    # --- Drive API endpoints ---
    GDRIVE_FILES_URL: str = "https://www.googleapis.com/drive/v3/files"
    GDRIVE_UPLOAD_URL: str = "https://www.googleapis.com/upload/drive/v3/files"

    # --- Transport ---
    GDRIVE_PAGE_SIZE: int = 1000
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # --- Constants and Computed Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent

    @model_validator(mode="after")
    def validate_values(self):
        level = self.LOG_LEVEL.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL '{self.LOG_LEVEL}'. Must be one of {LOG_LEVELS}.")
        self.LOG_LEVEL = level

        # Drive rejects page sizes outside 1..1000
        if not 1 <= self.GDRIVE_PAGE_SIZE <= 1000:
            raise ValueError("GDRIVE_PAGE_SIZE must be between 1 and 1000.")

        if self.GDRIVE_TOKEN_JSON and not self.GDRIVE_CREDENTIALS_JSON:
            logging.warning(
                "GDRIVE_CREDENTIALS_JSON not set. Using client_id/client_secret from GDRIVE_TOKEN_JSON if available."
            )
        return self

    @property
    def LOG_FILE(self) -> Path:
        return self.BASE_DIR / "gdrivefs.log"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.
    The first call to this function will initialize the settings.
    """
    return Settings()
