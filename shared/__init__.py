"""
Keysmith Shared Module
======================

Configuration, logging, console and result models shared by the
Keysmith engine and its command-line interface.
"""

from shared.config import InvalidConfigError, KeysmithConfig, get_config

__all__ = ["InvalidConfigError", "KeysmithConfig", "get_config"]
