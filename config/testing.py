import os

from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SALARY_SLIP_DIR = os.getenv("SALARY_SLIP_DIR", "/tmp/courier_hrms_test_slips")

AUTO_INIT_DB = False
AUTO_SEED_DB = False
