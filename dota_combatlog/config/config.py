"""Configuration module for the Dota combat log analyzer."""
import os
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional
import dotenv

# Load environment variables from .env file if present
dotenv.load_dotenv()

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class AppConfig:
    """Configuration for parsing, storage and logging."""
    # Database settings
    db_path: str = "combatlog.db"
    batch_size: int = 1000
    journal_mode: str = "WAL"
    synchronous: str = "NORMAL"
    foreign_keys: bool = True
    temp_store: str = "MEMORY"

    # Logging settings
    log_level: int = logging.INFO
    log_format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[str] = None

    # Parser settings
    show_progress: bool = False

    @property
    def engine_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    @classmethod
    def from_env(cls, db_path: Optional[str] = None) -> 'AppConfig':
        """Create a configuration from environment variables."""
        return cls(
            db_path=db_path or os.environ.get("DOTA_DB_PATH", "combatlog.db"),
            batch_size=int(os.environ.get("DOTA_BATCH_SIZE", "1000")),
            journal_mode=os.environ.get("DOTA_JOURNAL_MODE", "WAL"),
            synchronous=os.environ.get("DOTA_SYNCHRONOUS", "NORMAL"),
            foreign_keys=os.environ.get("DOTA_FOREIGN_KEYS", "True").lower() == "true",
            temp_store=os.environ.get("DOTA_TEMP_STORE", "MEMORY"),
            log_level=getattr(logging, os.environ.get("DOTA_LOG_LEVEL", "INFO").upper(), logging.INFO),
            log_format=os.environ.get("DOTA_LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.environ.get("DOTA_LOG_FILE"),
            show_progress=os.environ.get("DOTA_SHOW_PROGRESS", "False").lower() == "true",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return {
            "db_path": self.db_path,
            "batch_size": self.batch_size,
            "journal_mode": self.journal_mode,
            "synchronous": self.synchronous,
            "foreign_keys": self.foreign_keys,
            "temp_store": self.temp_store,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": self.log_file,
            "show_progress": self.show_progress,
        }


def configure_logging(config: AppConfig) -> None:
    """Configure logging based on the configuration."""
    handlers = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(config.log_format))
    handlers.append(console_handler)

    # File handler if log file specified
    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(logging.Formatter(config.log_format))
        handlers.append(file_handler)

    logging.basicConfig(
        level=config.log_level,
        handlers=handlers,
        format=config.log_format,
        force=True,
    )
