"""
Configuration Management Module

Provides centralized configuration using pydantic-settings. Every setting has a
default, so the program runs without any environment variables.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class BankingConfig(BaseSettings):
    """Home banking ledger configuration"""

    model_config = SettingsConfigDict(
        env_prefix="HOME_BANKING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Backing store
    data_file: str = "bank_data.txt"

    # Business rules
    first_account_number: int = 1001

    # Logging configuration
    log_level: str = "WARNING"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr


# Global configuration instance
config = BankingConfig()


def get_config() -> BankingConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankingConfig:
    """Reload configuration from environment"""
    global config
    config = BankingConfig()
    return config
