"""Shared configuration"""
from .settings import Settings, load_settings
from .logger_config import get_logger, logger

__all__ = ['Settings', 'load_settings', 'get_logger', 'logger']
