"""
Bot host wiring and configuration.
"""

from .config import ManagerConfig, config

__all__ = ["ManagerConfig", "config"]
