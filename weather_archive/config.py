# ABOUTME: Environment-driven settings for the weather archive dashboard.
# ABOUTME: Loads .env once and exposes module-level constants used by services and the web entry point.

import os

from dotenv import load_dotenv

load_dotenv()

NARRATIVE_MODEL = os.environ.get("NARRATIVE_MODEL", "openrouter:google/gemini-2.5-flash")

WEATHER_TIMEZONE = os.environ.get("WEATHER_TIMEZONE", "Asia/Tokyo")
DEFAULT_CITY = os.environ.get("DEFAULT_CITY", "Tokyo")
# Initial selection is a few days back so the archive has data for it
DEFAULT_DAYS_BACK = int(os.environ.get("DEFAULT_DAYS_BACK", "3"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", "8000"))
