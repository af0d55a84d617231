"""Root conftest — shared test configuration."""

import os

# Ensure tests never read a developer's .env secrets or data files
os.environ.setdefault("ENCRYPTION_KEY", "test-secret-key")
os.environ.setdefault("ARTICLES_PATH", "tests-nonexistent/articles.json")
os.environ.setdefault("EXCHANGE_RATES_PATH", "tests-nonexistent/exchange_rates.json")
os.environ.setdefault("LOG_FORMAT", "text")
