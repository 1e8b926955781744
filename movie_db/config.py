"""
Configuration management for the Movie Review API.

Loads configuration from environment variables and provides
a centralized Config dataclass for all settings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_DB_NAME = "movie_reviews"


@dataclass
class Config:
    """Centralized configuration from environment variables."""

    # MongoDB
    mongodb_uri: str
    db_name: str = ""  # Empty: use the database named in the URI
    collection_name: str = "movies"
    server_selection_timeout_ms: int = 5000

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Paths
    log_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            env_path: Optional path to .env file. If not provided,
                     looks for .env in the current directory.

        Returns:
            Config instance with loaded values.

        Raises:
            ValueError: If required environment variables are missing.
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        # Required variables
        mongodb_uri = os.getenv("MONGODB_URI")
        if not mongodb_uri:
            raise ValueError("MONGODB_URI environment variable is required")

        # Database config
        db_name = os.getenv("MONGODB_DB", "")
        timeout_ms = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

        # API settings
        api_host = os.getenv("API_HOST", "0.0.0.0")
        api_port = int(os.getenv("PORT", "3000"))

        log_dir = Path(os.getenv("LOG_DIR", str(Path.cwd() / "logs")))

        return cls(
            mongodb_uri=mongodb_uri,
            db_name=db_name,
            server_selection_timeout_ms=timeout_ms,
            api_host=api_host,
            api_port=api_port,
            log_dir=log_dir,
        )
