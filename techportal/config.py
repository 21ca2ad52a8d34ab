import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Upstream Technicians Web API (source of row records)
UPSTREAM_API_URL = os.getenv("UPSTREAM_API_URL", "http://localhost:5000/api")
UPSTREAM_API_TOKEN = os.getenv("UPSTREAM_API_TOKEN")
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "30"))

# Snapshot cache: "memory" (per process) or "redis"
CACHE_BACKEND = os.getenv("CACHE_BACKEND", "memory").lower()
# Seconds a last-seen list stays available as the offline fallback
SNAPSHOT_TTL = int(os.getenv("SNAPSHOT_TTL", "86400"))

# Redis Configuration (used when CACHE_BACKEND=redis)
REDIS_URL = os.getenv("REDIS_URL")
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD")
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_SSL = os.getenv("REDIS_SSL", "false").lower() == "true"

# Page sizes are fixed per screen
JOBS_PAGE_SIZE = int(os.getenv("JOBS_PAGE_SIZE", "20"))
PARTS_REQUESTS_PAGE_SIZE = int(os.getenv("PARTS_REQUESTS_PAGE_SIZE", "50"))
PRICING_PAGE_SIZE = int(os.getenv("PRICING_PAGE_SIZE", "100"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "500"))

# Frontend origins allowed by CORS
ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:4200,http://localhost:3000").split(",")
    if o.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
