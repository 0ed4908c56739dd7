"""Session management with an isolated scratch directory per session."""

from __future__ import annotations

import logging
import shutil
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from conceptsheet.core.archive import ArchivePackager
from conceptsheet.core.config import SESSIONS_DIR
from conceptsheet.core.session import FilePreviewStore, SessionState

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Represents a user session with isolated workspace."""

    session_id: str
    created_at: datetime
    session_dir: Path
    state: SessionState
    previews: FilePreviewStore
    packager: ArchivePackager = field(default_factory=ArchivePackager)

    def preview_path(self) -> Path | None:
        """Path of the current preview file, if an image is selected."""
        if self.state.image is None:
            return None
        return self.previews.path_for(self.state.image.preview_ref)


class SessionManager:
    """Manages user sessions with isolated workspaces."""

    def __init__(self, base_dir: Path = SESSIONS_DIR):
        self.base_dir = base_dir
        self._sessions: dict[str, Session] = {}

        # Ensure base directory exists
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def create_session(self) -> Session:
        """Create a new session with an isolated uploads directory."""
        session_id = str(uuid.uuid4())
        session_dir = self.base_dir / session_id
        previews = FilePreviewStore(session_dir / "uploads")

        session = Session(
            session_id=session_id,
            created_at=datetime.now(),
            session_dir=session_dir,
            state=SessionState(previews),
            previews=previews,
        )

        self._sessions[session_id] = session
        logger.info("Created session %s", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get an existing session by ID."""
        return self._sessions.get(session_id)

    def cleanup_session(self, session_id: str) -> bool:
        """Remove session and all associated files."""
        if session_id not in self._sessions:
            return False

        session = self._sessions.pop(session_id)
        session.state.close()
        shutil.rmtree(session.session_dir, ignore_errors=True)
        logger.info("Removed session %s", session_id)
        return True

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Remove sessions older than max_age_hours."""
        cutoff = datetime.now()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if (cutoff - session.created_at).total_seconds() / 3600 > max_age_hours
        ]

        return sum(1 for session_id in to_remove if self.cleanup_session(session_id))


# Global session manager instance
session_manager = SessionManager()
