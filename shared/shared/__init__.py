"""Shared utilities for the proxy services."""

from shared.config import BaseServiceSettings
from shared.logging import setup_logging
from shared.middleware import build_middleware

__all__ = ["setup_logging", "BaseServiceSettings", "build_middleware"]
