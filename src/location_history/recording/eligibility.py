"""Document-eligibility predicate built from name patterns."""

from __future__ import annotations

import re
from typing import Iterable, Pattern

from location_history.runtime.config import DEFAULT_IGNORED_PATTERNS


class DocumentFilter:
    """Rejects "uninteresting" documents such as minibuffers or popups."""

    def __init__(self, patterns: Iterable[str] = DEFAULT_IGNORED_PATTERNS) -> None:
        self._patterns: tuple[Pattern[str], ...] = tuple(
            re.compile(pattern) for pattern in patterns
        )

    @property
    def patterns(self) -> tuple[str, ...]:
        return tuple(pattern.pattern for pattern in self._patterns)

    def is_eligible(self, name: str) -> bool:
        return not any(pattern.search(name) for pattern in self._patterns)

    def __call__(self, name: str) -> bool:
        return self.is_eligible(name)


__all__ = ["DocumentFilter"]
