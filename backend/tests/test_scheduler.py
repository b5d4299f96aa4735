from unittest.mock import patch

from vinheria.core import scheduler


def test_purge_job_delegates_to_session_manager():
    with patch.object(scheduler, "session_manager") as sessions:
        sessions.purge_expired.return_value = 3
        scheduler.purge_expired_sessions_job()

    sessions.purge_expired.assert_called_once_with()


def test_purge_job_logs_instead_of_raising():
    with patch.object(scheduler, "session_manager") as sessions:
        sessions.purge_expired.side_effect = RuntimeError("boom")
        scheduler.purge_expired_sessions_job()
