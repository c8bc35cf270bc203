"""
Settings read from the environment (and a .env file, when present).
"""

import os

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, Field

load_dotenv(find_dotenv(usecwd=True))


class Settings(BaseModel):
    """Investigator settings."""
    log_level: str = Field(default="WARNING", description="Root log level for the CLI")
    chain_delimiter: str = Field(default="->", description="Default inheritance chain delimiter")


def get_settings() -> Settings:
    """Read settings from INVESTIGATOR_* environment variables."""
    defaults = Settings()
    return Settings(
        log_level=os.getenv("INVESTIGATOR_LOG_LEVEL", defaults.log_level).upper(),
        chain_delimiter=os.getenv("INVESTIGATOR_CHAIN_DELIMITER", defaults.chain_delimiter),
    )
