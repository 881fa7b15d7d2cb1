"""
Environment-driven settings for Explorer
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

# LLM configuration
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
FALLBACK_GEMINI_MODEL = os.getenv("FALLBACK_GEMINI_MODEL", "gemini-2.5-pro")
GENERATION_TIMEOUT = int(os.getenv("GENERATION_TIMEOUT", "120"))  # seconds per LLM call

# Image search
PEXELS_API_KEY = os.getenv("PEXELS_API_KEY")
PEXELS_SEARCH_URL = os.getenv("PEXELS_SEARCH_URL", "https://api.pexels.com/v1/search")
PEXELS_TIMEOUT = float(os.getenv("PEXELS_TIMEOUT", "20"))

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
SAVED_CONTENT_TABLE = os.getenv("SAVED_CONTENT_TABLE", "saved_content")

# Client side
CONTENT_API_URL = os.getenv("CONTENT_API_URL", "http://localhost:8000")
CLIENT_HTTP_TIMEOUT = float(os.getenv("CLIENT_HTTP_TIMEOUT", "90"))

# Server
LOG_FILE = os.getenv("LOG_FILE", "explorer.log")
CORS_ORIGINS: List[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]
