"""In-memory store for security review sessions and their memory entries.

This stands in for a persistent backend: tools only see the methods below, so a
database-backed implementation can replace it without touching the tool layer.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from tinybrain_mcp_server.errors import ToolError, raise_tool_error


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Session:
    """A unit of security work that memories are filed under."""

    id: str
    name: str
    task_type: str
    description: str = ""
    status: str = "active"
    created_at: str = field(default_factory=_now)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation."""
        return asdict(self)


@dataclass
class MemoryEntry:
    """A single piece of remembered information."""

    id: str
    session_id: str
    title: str
    content: str
    category: str
    priority: int = 5
    confidence: float = 0.5
    tags: list[str] = field(default_factory=list)
    source: str | None = None
    created_at: str = field(default_factory=_now)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation."""
        return asdict(self)


class SessionManager:
    """In-memory manager mapping identifiers to sessions and memory entries."""

    def __init__(self) -> None:
        """Initialize the manager with empty state."""
        self._sessions: dict[str, Session] = {}
        self._memories: dict[str, MemoryEntry] = {}
        self._lock = threading.Lock()

    def create_session(
        self, name: str, task_type: str, description: str = ""
    ) -> Session:
        """Register a new session and return it."""
        session = Session(
            id=str(uuid.uuid4()),
            name=name,
            task_type=task_type,
            description=description,
        )
        with self._lock:
            self._sessions[session.id] = session
        return session

    def get_session(self, session_id: str) -> Session:
        """Retrieve a session or raise a tool error."""
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise ToolError("InvalidSession", f"Unknown session_id '{session_id}'")
        return session

    def list_sessions(
        self,
        task_type: str | None = None,
        status: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Session]:
        """Return sessions oldest first, optionally filtered."""
        with self._lock:
            sessions = list(self._sessions.values())
        if task_type is not None:
            sessions = [s for s in sessions if s.task_type == task_type]
        if status is not None:
            sessions = [s for s in sessions if s.status == status]
        sessions.sort(key=lambda s: s.created_at)
        return sessions[offset : offset + limit]

    def store_memory(
        self,
        session_id: str,
        title: str,
        content: str,
        category: str,
        priority: int = 5,
        confidence: float = 0.5,
        tags: list[str] | None = None,
        source: str | None = None,
    ) -> MemoryEntry:
        """Attach a new memory entry to an existing session."""
        entry = MemoryEntry(
            id=str(uuid.uuid4()),
            session_id=session_id,
            title=title,
            content=content,
            category=category,
            priority=priority,
            confidence=confidence,
            tags=list(tags or []),
            source=source,
        )
        with self._lock:
            if session_id not in self._sessions:
                raise_tool_error("InvalidSession", f"Unknown session_id '{session_id}'")
            self._memories[entry.id] = entry
        return entry

    def get_memory(self, memory_id: str) -> MemoryEntry:
        """Retrieve a memory entry or raise a tool error."""
        with self._lock:
            entry = self._memories.get(memory_id)
        if entry is None:
            raise ToolError("NotFound", f"Unknown memory_id '{memory_id}'")
        return entry

    def search_memories(
        self,
        query: str,
        session_id: str | None = None,
        category: str | None = None,
        limit: int = 20,
    ) -> list[MemoryEntry]:
        """Case-insensitive substring search over titles and contents.

        Results are ordered by priority, then confidence, highest first.
        """
        needle = query.lower()
        with self._lock:
            entries = list(self._memories.values())
        matches = [
            entry
            for entry in entries
            if (session_id is None or entry.session_id == session_id)
            and (category is None or entry.category == category)
            and (needle in entry.title.lower() or needle in entry.content.lower())
        ]
        matches.sort(key=lambda e: (e.priority, e.confidence), reverse=True)
        return matches[:limit]

    def stats(self) -> dict[str, object]:
        """Counts of stored records."""
        with self._lock:
            sessions = list(self._sessions.values())
            memories = list(self._memories.values())
        by_category: dict[str, int] = {}
        for entry in memories:
            by_category[entry.category] = by_category.get(entry.category, 0) + 1
        return {
            "sessions": len(sessions),
            "active_sessions": sum(1 for s in sessions if s.status == "active"),
            "memory_entries": len(memories),
            "memories_by_category": by_category,
        }
