"""Configuration module for the Authing management client."""
from .settings import ClientConfig, load_settings

__all__ = ["ClientConfig", "load_settings"]
