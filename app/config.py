import os
import logging
from dotenv import load_dotenv

load_dotenv()

# ---------------------------
# Database
# ---------------------------
DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    raise ValueError("DATABASE_URL is not set in the .env file")

DB_ECHO = os.getenv("DB_ECHO", "False") == "True"

# ---------------------------
# Tokens
# ---------------------------
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", 7))

# ---------------------------
# Storage
# ---------------------------
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
UPLOADS_DIR = os.getenv("UPLOADS_DIR", os.path.join(BASE_DIR, "uploads"))
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/")

# ---------------------------
# Intake policy
# ---------------------------
ACCEPTED_EXTENSION = "py"
MAX_UPLOAD_BYTES = 5 * 1024 * 1024
CLASS_OPTIONS = ("6th", "7th", "8th", "9th", "10th")
SECTION_OPTIONS = ("A", "B", "C")

REPORT_FILENAME = "student-results.pdf"

# ---------------------------
# Logging
# ---------------------------
LOG_LEVEL = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
LOG_FILE = os.getenv("LOG_FILE")  # unset -> console only
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s"
