"""Configuration for sandbox ingestion"""
import os
from dotenv import load_dotenv

load_dotenv()

# ESM CDN used for every resolved bare specifier
ESM_CDN_BASE = os.getenv("ESM_CDN_BASE", "https://esm.sh").rstrip("/")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Pipeline stage debugging
DEBUG_ENABLED = os.getenv("INGEST_DEBUG", "true").lower() == "true"
DEBUG_DETAILED = os.getenv("INGEST_DEBUG_DETAILED", "false").lower() == "true"

# HTTP surface
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
