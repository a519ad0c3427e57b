# config.py
import os
from dotenv import load_dotenv

load_dotenv()

MONGODB_URI = os.getenv("MONGODB_URI")
MONGODB_DB = os.getenv("MONGODB_DB", "catalog_db")
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")

# Aggregator endpoint that category services notify after their data changes
CENTRAL_API_URL = os.getenv("CENTRAL_API_URL", "http://127.0.0.1:8000/api/catalog")

# Shared by every router through CORSMiddleware
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS",
        "https://junior-senior-gaps-killer.vercel.app,http://127.0.0.1:5500,http://127.0.0.1:5501",
    ).split(",")
    if origin.strip()
]
ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization"]

FANOUT_TIMEOUT = float(os.getenv("FANOUT_TIMEOUT", "10"))
CONFIG_CACHE_TTL = int(os.getenv("CONFIG_CACHE_TTL", "600"))
ORDER_LOCK_TIMEOUT = float(os.getenv("ORDER_LOCK_TIMEOUT", "30"))

UNCONFIGURED_PREFIX = "REMPLIR_"
DEFAULT_IMAGE_URL = "https://i.postimg.cc/D0b7ZxQc/Logo-for-Training-Platform-Dynamic-Emblem.png"
