"""ID generators for the types package.

Provides element and job ID generation, plus type aliases.
"""

from __future__ import annotations

import secrets
import string
import uuid
from datetime import datetime, timezone

# Type aliases
ElementId = str
JobId = str
WorkItemId = str


def generate_element_id() -> ElementId:
    """Generate a unique element identifier (UUID4 string)."""
    return str(uuid.uuid4())


def generate_job_id(operation: str) -> JobId:
    """Generate a unique job ID.

    Creates IDs in the format: <operation>-YYYYMMDD-HHMMSS-xxxxxx
    where xxxxxx is a random 6-character alphanumeric suffix.

    Example:
        >>> generate_job_id("execute")  # e.g., "execute-20251208-143022-abc123"
    """
    now = datetime.now(timezone.utc)
    timestamp = now.strftime("%Y%m%d-%H%M%S")
    suffix = "".join(secrets.choice(string.ascii_lowercase + string.digits) for _ in range(6))
    return f"{operation}-{timestamp}-{suffix}"
