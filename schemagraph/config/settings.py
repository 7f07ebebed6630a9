"""
Configuration management for schemagraph
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Input
    schema_path: str = Field(default=".", description="Schema file or directory")
    file_extensions: List[str] = Field(default=[".graphql", ".gql"])

    # Logging
    log_level: str = Field(default="WARNING")

    class Config:
        env_prefix = "SCHEMAGRAPH_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
