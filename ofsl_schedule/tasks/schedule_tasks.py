"""
Celery tasks for schedule updates.
"""

import traceback

from ofsl_schedule.core.celery_app import celery_app
from ofsl_schedule.core.logging_config import get_logger
from ofsl_schedule.services.supabase_store import SupabaseScheduleStore
from ofsl_schedule.services.schedule_service import ScheduleService
from ofsl_schedule.services.formats import format_label

logger = get_logger(__name__)


def build_service() -> ScheduleService:
    return ScheduleService(SupabaseScheduleStore())


@celery_app.task(bind=True, name="propagate_format_change")
def propagate_format_change_task(self, league_id: int, tier_number: int, week_number: int, new_format: str):
    """
    Async task to apply a tier's new format to every later week.

    Returns:
        dict: Tier ids updated and tiers skipped with their reasons
    """
    try:
        self.update_state(
            state="PROGRESS",
            meta={"status": f"Applying {format_label(new_format)} to tier {tier_number} after week {week_number}..."}
        )

        service = build_service()
        summary = service.apply_format_to_future_weeks(league_id, tier_number, week_number, new_format)

        result = summary.as_dict()
        result.update({
            "success": True,
            "message": f"Updated {len(summary.updated)} tiers, skipped {len(summary.skipped)}"
        })
        return result

    except Exception as e:
        error_trace = traceback.format_exc()
        logger.error(f"Error in propagate_format_change_task: {error_trace}")

        return {
            "success": False,
            "message": f"Format propagation failed: {str(e)}",
            "error": str(e)
        }
