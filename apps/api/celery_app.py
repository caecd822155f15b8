"""Celery application configuration for scheduled bulletins."""

from celery import Celery
from celery.schedules import crontab

from apps.api.core.config import get_settings

settings = get_settings()

# Use Redis as broker and backend
celery_app = Celery(
    "ledger_bulletins",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["apps.api.tasks.bulletin_tasks"],
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.TIMEZONE,
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,
    worker_prefetch_multiplier=1,
    result_expires=3600 * 24,  # Results expire after 24 hours
)

celery_app.conf.task_routes = {
    "apps.api.tasks.bulletin_tasks.*": {"queue": "bulletins"},
}

# crontab hours are evaluated in conf.timezone
celery_app.conf.beat_schedule = {
    "market-bulletin": {
        "task": "apps.api.tasks.bulletin_tasks.send_market_bulletin",
        "schedule": crontab(minute=0, hour=settings.bulletin_hours),
    },
}

if __name__ == "__main__":
    celery_app.start()
