"""
Utility modules for spex.
"""
from .logging_config import get_logger, LoggerFactory, LogContext, StructuredFormatter
from .exceptions import *

__all__ = [
    'get_logger',
    'LoggerFactory',
    'LogContext',
    'StructuredFormatter',
    'SpexError',
    'SpecError',
    'SpecUsageError',
    'FrozenSpecError',
    'ConfigurationError',
]
