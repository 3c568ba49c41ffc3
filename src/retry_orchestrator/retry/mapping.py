"""
Declarative error mapping consulted by the Classifier.

Rules are checked in order and the first match wins. A rule whose codes
are all claimed by an earlier rule could never match, so construction
rejects it as ambiguous.
"""

import json
from pathlib import Path
from typing import Iterable

import structlog
from pydantic import TypeAdapter

from retry_orchestrator.models.enums import Classification
from retry_orchestrator.models.mapping import StatusRule
from retry_orchestrator.retry.exceptions import ErrorMappingConflict

logger = structlog.get_logger(__name__)

_RULES_ADAPTER = TypeAdapter(list[StatusRule])


class ErrorMapping:
    """
    Ordered, immutable table of StatusRules.

    Long-lived and shared read-only between classifiers and runs.
    """

    def __init__(self, rules: Iterable[StatusRule]):
        self._rules: tuple[StatusRule, ...] = tuple(rules)
        for i, rule in enumerate(self._rules):
            for earlier in self._rules[:i]:
                if earlier.covers(rule):
                    raise ErrorMappingConflict(
                        f"Rule {rule.describe()} ({rule.identity}) is shadowed by "
                        f"earlier rule {earlier.describe()} ({earlier.identity})",
                        {"rule": rule.describe(), "shadowed_by": earlier.describe()},
                    )

    @property
    def rules(self) -> tuple[StatusRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def __repr__(self) -> str:
        return f"ErrorMapping([{', '.join(r.describe() for r in self._rules)}])"

    def lookup(self, status: int) -> StatusRule | None:
        """Return the first rule matching ``status``, or None if unmapped."""
        for rule in self._rules:
            if rule.matches(status):
                return rule
        return None

    def with_rules(self, *rules: StatusRule) -> "ErrorMapping":
        """
        Return a new mapping with ``rules`` consulted before the existing ones.

        Raises:
            ErrorMappingConflict: If any resulting rule is shadowed
        """
        return ErrorMapping((*rules, *self._rules))

    @classmethod
    def from_file(cls, path: str | Path) -> "ErrorMapping":
        """
        Load a mapping from a JSON list of rule objects.

        Example file:
            [
                {"status": 429, "identity": "too many requests", "classification": "recoverable"},
                {"status_range": [400, 499], "identity": "client error", "classification": "unrecoverable"}
            ]

        Raises:
            FileNotFoundError: If the file does not exist
            pydantic.ValidationError: If a rule is malformed
            ErrorMappingConflict: If a rule is shadowed
        """
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        mapping = cls(_RULES_ADAPTER.validate_python(raw))
        logger.info("Error mapping loaded", path=str(path), rules_count=len(mapping))
        return mapping


DEFAULT_ERROR_MAPPING = ErrorMapping(
    [
        StatusRule(status=400, identity="bad request", classification=Classification.UNRECOVERABLE),
        StatusRule(status=403, identity="forbidden", classification=Classification.UNRECOVERABLE),
        StatusRule(status=404, identity="not found", classification=Classification.UNRECOVERABLE),
        # Not a transient server condition: the endpoint will never support the request
        StatusRule(status=501, identity="not implemented", classification=Classification.UNRECOVERABLE),
        StatusRule(status_range=(400, 499), identity="client error", classification=Classification.UNRECOVERABLE),
        StatusRule(status_range=(500, 599), identity="server error", classification=Classification.RECOVERABLE),
    ]
)
