"""Session recorder: stores completed focus sessions on the backend."""

from __future__ import annotations

from datetime import datetime

from pydantic import ValidationError

from pomotrack_cli.models.core import PomodoroSession
from pomotrack_cli.services.api.client import APIClient, APIError
from pomotrack_cli.services.api.sessions import SessionsAPI
from pomotrack_cli.utils.logger import get_logger

logger = get_logger("sessions")


class SessionRecordError(Exception):
    """The backend did not store the session."""


class SessionRecorder:
    """Records one completed focus interval per call. Never retries."""

    def __init__(self, client: APIClient):
        self.api = SessionsAPI(client)

    async def record(
        self,
        task_id: str,
        start_time: datetime,
        end_time: datetime,
        duration: int,
        completed: bool = True,
    ) -> PomodoroSession:
        """Create the session record; raises SessionRecordError on failure."""
        try:
            data = await self.api.create_session(
                task_id, start_time, end_time, duration, completed
            )
            session = PomodoroSession.model_validate(data)
        except (APIError, ValidationError) as e:
            raise SessionRecordError(str(e)) from e

        logger.info("recorded %ss session for task %s", duration, task_id)
        return session
