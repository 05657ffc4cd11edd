import atexit
import logging

from apscheduler.schedulers.background import BackgroundScheduler

from .errors import IngestionFailed

logger = logging.getLogger(__name__)

JOB_ID = 'fetch_top_headlines'


def scheduled_ingest(pipeline):
    try:
        saved = pipeline.run_ingestion()
    except IngestionFailed as e:
        logger.error(f"Scheduled ingestion failed: {e}")
        return []
    logger.info(f"Scheduled ingestion stored {len(saved)} new articles")
    return saved


def start_scheduler(pipeline, interval_minutes=20, scheduler=None):
    """Run ``pipeline`` every ``interval_minutes`` in a background thread."""
    scheduler = scheduler or BackgroundScheduler()
    scheduler.add_job(
        scheduled_ingest,
        'interval',
        minutes=interval_minutes,
        args=[pipeline],
        id=JOB_ID,
        max_instances=1,
        replace_existing=True,
    )
    scheduler.start()
    atexit.register(lambda: scheduler.shutdown(wait=False))
    logger.info(f"Scheduled top headlines ingestion every {interval_minutes} minutes")
    return scheduler
