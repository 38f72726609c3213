"""
Celery configuration for background schedule updates.
"""

from celery import Celery

from ofsl_schedule.core.config import REDIS_URL, LEAGUE_TIMEZONE

# Create Celery app
celery_app = Celery(
    "ofsl_schedule",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["ofsl_schedule.tasks.schedule_tasks"]
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=LEAGUE_TIMEZONE,
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max
    task_soft_time_limit=240,  # 4 minutes soft limit
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,
)
