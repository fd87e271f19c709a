"""Application configuration via environment variables."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

# Content catalog (categories, palettes, slots, weights)
CATALOG_PATH = Path(os.getenv("CATALOG_PATH", str(BASE_DIR / "catalog.json")))

# Layout grid
DEFAULT_GRID_WIDTH = int(os.getenv("DEFAULT_GRID_WIDTH", "12"))
DEFAULT_GRID_HEIGHT = int(os.getenv("DEFAULT_GRID_HEIGHT", "20"))
MAX_GRID_SIZE = int(os.getenv("MAX_GRID_SIZE", "200"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
