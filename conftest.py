"""Global pytest configuration."""

import os

# Keep tests on in-memory storage regardless of the developer's .env
os.environ.setdefault("TRIPBOOK_STORAGE_URL", "")
