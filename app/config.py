# app/config.py
from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    APP_NAME: str = "PR Review Report"
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    GITHUB_TOKEN: Optional[str] = None
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_PER_PAGE: int = 100

    RISK_MANY_FILES: int = 25
    RISK_HIGH_CHURN: int = 800
    REPORT_TOP_N: int = 8

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
