"""
Runtime configuration for the student record manager.

Every setting is a module-level constant read from the environment with a sensible
default, so the application runs out of the box from any working directory. The
stores read these constants when they are constructed, which lets callers (and the
test suite) point them somewhere else.
"""
# studentdb/config.py

import os

# File locations
STUDENT_FILE = os.getenv("STUDENTDB_STUDENT_FILE", "students.csv")
USERS_FILE = os.getenv("STUDENTDB_USERS_FILE", "users.txt")  # username and encoded password
LOG_FOLDER = os.getenv("STUDENTDB_LOG_FOLDER", "user_logs")

# Credentials
OBFUSCATION_KEY = os.getenv("STUDENTDB_OBFUSCATION_KEY", "key123")
CREDENTIAL_SCHEME = os.getenv("STUDENTDB_CREDENTIAL_SCHEME", "xor")  # xor|scrypt
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin"

# Diagnostics
LOG_LEVEL = os.getenv("STUDENTDB_LOG_LEVEL", "INFO").upper()
