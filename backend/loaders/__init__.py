"""
Loaders Module - Chat-log text loading.
"""

from .text_loader import (
    load_chat_log,
    load_multiple_logs,
    TextLoadError
)

__all__ = [
    'load_chat_log',
    'load_multiple_logs',
    'TextLoadError',
]
