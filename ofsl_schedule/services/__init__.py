"""
Services for format rules, week calculation and Supabase persistence.
"""

from .supabase_store import SupabaseScheduleStore
from .schedule_service import ScheduleService

__all__ = [
    "SupabaseScheduleStore",
    "ScheduleService"
]
