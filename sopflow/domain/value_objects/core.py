"""Domain value objects for sopflow.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from sopflow.domain.enums import EvidenceKind

# Template-local task keys: lowercase alphanumeric with optional hyphens/underscores.
_KEY_RE = re.compile(r"^[a-z0-9]+([-_][a-z0-9]+)*$")
_URL_RE = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


@dataclass(frozen=True)
class TaskKey:
    """Value object for a template-local task identifier.

    Keys are 1-64 characters, lowercase alphanumeric with optional
    hyphens or underscores (e.g. 'claim-gbp', 'step_1').
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 64

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Task key must be a non-empty string")
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(f"Task key must not exceed {self.MAX_LENGTH} characters")
        if not _KEY_RE.match(self.value):
            raise ValueError(
                "Task key must be lowercase alphanumeric with optional hyphens "
                "or underscores (e.g. 'claim-gbp')"
            )


@dataclass(frozen=True)
class Evidence:
    """Evidence recorded when completing a task.

    value holds the URL, text, or file/screenshot reference. URL evidence
    must be an http(s) URL.
    """

    kind: EvidenceKind
    value: str
    recorded_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate value against kind.

        Raises:
            ValueError: If value is blank, kind is NONE, or a URL is malformed.
        """
        if self.kind == EvidenceKind.NONE:
            raise ValueError("Evidence cannot be recorded for evidence kind 'none'")
        if not self.value or not self.value.strip():
            raise ValueError("Evidence value must be a non-empty string")
        if self.kind == EvidenceKind.URL and not _URL_RE.match(self.value.strip()):
            raise ValueError("URL evidence must be an http(s) URL")
