"""
Vector database schemas.

Index lifecycle states and filter expression helpers shared by the gateway.

Dependencies: None
System role: Type definitions for vector operations
"""

import json
import math
from enum import Enum

from code_indexer.core.exceptions import ValidationError

SESSION_FIELD = "sessionId"


class IndexState(str, Enum):
    """Lifecycle of the collection's vector index as reported by the store."""

    ABSENT = "absent"
    BUILDING = "building"
    FINISHED = "finished"
    FAILED = "failed"

    @classmethod
    def from_store(cls, raw: object) -> "IndexState":
        """Map a Milvus state string (e.g. 'Finished', 'IndexStateFailed')."""
        if raw is None or raw == "":
            return cls.ABSENT
        name = str(raw).strip()
        if name.startswith("IndexState"):
            name = name[len("IndexState"):]
        name = name.lower()
        if name == "finished":
            return cls.FINISHED
        if name == "failed":
            return cls.FAILED
        if name == "none":
            return cls.ABSENT
        return cls.BUILDING


def session_filter(session_id: str) -> str:
    """
    Build the equality filter that scopes a query to one session.

    Raises:
        ValidationError: When the session id is empty
    """
    if not isinstance(session_id, str) or not session_id.strip():
        raise ValidationError("session_id is required", field="session_id")
    return f"{SESSION_FIELD} == {json.dumps(session_id, ensure_ascii=False)}"


def compute_nlist(total_vectors: int, lower: int = 4, upper: int = 128) -> int:
    """IVF cluster count: ceil(count / 2) bounded into [lower, upper]."""
    return min(upper, max(lower, math.ceil(total_vectors / 2)))
