"""Settings shared by every environment; each env module overrides what differs."""

import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "courier_hrms"),
}

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
SALARY_SLIP_DIR = os.getenv("SALARY_SLIP_DIR", os.path.join(UPLOAD_DIR, "salary_slips"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(16 * 1024 * 1024)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
OTP_TTL_SECONDS = int(os.getenv("OTP_TTL_SECONDS", "300"))
