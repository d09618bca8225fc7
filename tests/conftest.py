"""Test environment: a throwaway SQLite file, fast bcrypt and no outbound email."""

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="elearning-tests-")

os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["LOG_FILE_PATH"] = os.path.join(_TMP_DIR, "app.log")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_ADMIN"] = "true"
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("RESEND_EMAIL", None)

# Registers the TRACE level before any application module logs with it.
import elearning.core.logging_config  # noqa: E402,F401
