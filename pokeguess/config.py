# pokeguess/config.py

import logging
import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s\n%(message)s\n"
)

logger = logging.getLogger("pokeguess")

# --- Configuration ---
DB_PATH             = os.getenv("DB_PATH", "database.db")
CACHE_TTL_DAYS      = int(os.getenv("CACHE_TTL_DAYS", "7"))

COMMAND_PREFIX      = os.getenv("COMMAND_PREFIX", "!joy")
MAX_POKEMON_ID      = int(os.getenv("MAX_POKEMON_ID", "476"))  # Gen 1 - 4

POKEAPI_BASE_URL    = os.getenv("POKEAPI_BASE_URL", "https://pokeapi.co/api/v2/")
FETCH_TIMEOUT       = float(os.getenv("FETCH_TIMEOUT", "10"))

# unset -> retry forever
RANDOM_MAX_ATTEMPTS = int(os.getenv("RANDOM_MAX_ATTEMPTS")) if os.getenv("RANDOM_MAX_ATTEMPTS") else None
RANDOM_RETRY_DELAY  = float(os.getenv("RANDOM_RETRY_DELAY", "0"))

SERVER_HOST         = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT         = int(os.getenv("SERVER_PORT", "8000"))

# comma separated, empty -> no CORS headers
CORS_ORIGINS        = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
