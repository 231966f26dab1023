"""
Shared utilities for RagRouter: configuration and logging.
"""

from .config import ConfigurationError, DocumentSource, RagRouterConfig
from .logging import enable_request_logging, setup_logging

__all__ = [
    "RagRouterConfig",
    "ConfigurationError",
    "DocumentSource",
    "setup_logging",
    "enable_request_logging",
]
