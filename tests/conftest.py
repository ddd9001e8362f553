"""Test configuration and fixtures for the product catalog."""

import os

# Must be set before the default configuration is loaded on first import
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from tests.fixtures import *  # noqa: E402,F401,F403
