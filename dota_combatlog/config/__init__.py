"""Configuration package for the Dota combat log analyzer."""
from .config import AppConfig, configure_logging

__all__ = ["AppConfig", "configure_logging"]
