"""
Background scheduler for periodic tasks.

This module manages background jobs that run on a schedule:
- Purge expired sessions: Runs every SESSION_CLEANUP_MINUTES
"""

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from vinheria.core.config import settings
from vinheria.services.session_manager import session_manager
import logging

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()


def purge_expired_sessions_job():
    """
    Background job to drop expired sessions from memory.

    Expired sessions are already refused on validation; this only keeps
    the table from growing with sessions nobody logged out of.
    """
    try:
        removed = session_manager.purge_expired()
        if removed:
            logger.info(f"Session cleanup: removed {removed} expired sessions")
        else:
            logger.debug("Session cleanup: nothing to remove")
    except Exception as e:
        logger.error(f"Error in purge_expired_sessions_job: {str(e)}")


def start_scheduler():
    """
    Start the background scheduler.

    This should be called when the FastAPI app starts.
    """
    if not scheduler.running:
        scheduler.add_job(
            purge_expired_sessions_job,
            trigger=IntervalTrigger(minutes=settings.SESSION_CLEANUP_MINUTES),
            id="purge_expired_sessions",
            name="Purge expired sessions",
            replace_existing=True
        )

        scheduler.start()
        logger.info(
            f"Background scheduler started. Session cleanup runs every "
            f"{settings.SESSION_CLEANUP_MINUTES} minutes."
        )


def stop_scheduler():
    """
    Stop the background scheduler.

    This should be called when the FastAPI app shuts down.
    """
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Background scheduler stopped.")
