import os

# Remote backend that owns persistence and AI enrichment
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:5000").rstrip("/")

# Base URL the client library talks to (already includes the /api prefix)
API_BASE_URL = os.getenv("NEXT_PUBLIC_API_URL", "http://localhost:5000/api").rstrip("/")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

# Seconds to wait on the backend before giving up
BACKEND_TIMEOUT = float(os.getenv("BACKEND_TIMEOUT", "30"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Key the bearer token is persisted under on the client side
TOKEN_KEY = "saveit_token"

MIN_CODE_LENGTH = 10
DEFAULT_CODE_LANGUAGE = "javascript"
DEFAULT_USER_ROLE = "beginner"
SUMMARY_INPUT_LIMIT = 1000
