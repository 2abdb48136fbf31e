"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and pins the
settings the test-suite relies on before the application is imported.
"""

import os
import sys
import tempfile
from pathlib import Path

# Add project root to sys.path so we can import app, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
# Cheapest bcrypt cost keeps the suite fast
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("STORAGE_BACKEND", "local")
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="gutcheck-uploads-"))
