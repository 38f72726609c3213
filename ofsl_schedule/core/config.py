"""
Configuration constants for the OFSL League Schedule Service.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Supabase Configuration
# The service role key is needed for writes that bypass row-level security;
# read-only deployments can run with the anon key.
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY", "")

# Table Names
TABLE_LEAGUES = "leagues"
TABLE_WEEKLY_SCHEDULES = "weekly_schedules"

# Redis connection URL for Celery (default to localhost)
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# API Configuration
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# League timezone: "today" and the game-day cutoff are evaluated in local time
LEAGUE_TIMEZONE = os.getenv("LEAGUE_TIMEZONE", "America/Toronto")

# Week Calculation Rules
DAYS_PER_WEEK = 7
GAME_DAY_CUTOFF_HOUR = 23  # Game day counts as finished from 11:00 PM

# Position Rules
ALL_POSITIONS = ("A", "B", "C", "D", "E", "F")
DEFAULT_TEAM_COUNT = 3
DEFAULT_GRID_COLUMNS = "3 columns"
