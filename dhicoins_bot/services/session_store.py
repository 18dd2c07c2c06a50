"""
In-memory session store for the buy conversation.
"""

from typing import Dict, Optional

from dhicoins_bot.models.session import Session
from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


class SessionStore:
    """
    Holds one ``Session`` per user.

    Sessions never expire; they are removed by /start, by a successful order
    submission, or replaced when the user selects "Buy USDT" again.
    """

    def __init__(self):
        self._sessions: Dict[int, Session] = {}
        logger.info("SessionStore initialized")

    def get(self, user_id: int) -> Optional[Session]:
        """
        Get the session for a user.

        Args:
            user_id: Telegram user ID

        Returns:
            Session if one is in progress, None otherwise
        """
        session = self._sessions.get(user_id)

        if session:
            logger.debug(
                "Retrieved session",
                extra={"user_id": user_id, "step": session.step.value},
            )

        return session

    def set(self, user_id: int, session: Session) -> None:
        """Store or replace the session for a user."""
        self._sessions[user_id] = session

        logger.info(
            "Session set",
            extra={"user_id": user_id, "step": session.step.value},
        )

    def delete(self, user_id: int) -> bool:
        """
        Remove the session for a user.

        Returns:
            True if a session was removed, False if none existed
        """
        if self._sessions.pop(user_id, None) is not None:
            logger.info("Session cleared", extra={"user_id": user_id})
            return True

        logger.debug("No session to clear", extra={"user_id": user_id})
        return False

    def count(self) -> int:
        """Number of sessions in progress."""
        return len(self._sessions)
