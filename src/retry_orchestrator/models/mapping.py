"""
Status rule model for the declarative error mapping.

A rule maps a discriminant (a single status code or an inclusive range)
to a stable error identity and a default classification.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from retry_orchestrator.models.enums import Classification


class StatusRule(BaseModel):
    """
    One entry of an ErrorMapping.

    Exactly one of ``status`` or ``status_range`` must be set.
    """

    model_config = ConfigDict(frozen=True)

    status: Optional[int] = Field(default=None, ge=100, le=999, description="Single status code")
    status_range: Optional[tuple[int, int]] = Field(
        default=None, description="Inclusive (low, high) status code range"
    )
    identity: str = Field(..., min_length=1, description="Stable error name, e.g. 'bad request'")
    classification: Classification = Field(..., description="Verdict for matching outcomes")

    @model_validator(mode="after")
    def check_discriminant(self) -> "StatusRule":
        if (self.status is None) == (self.status_range is None):
            raise ValueError("exactly one of 'status' or 'status_range' must be set")
        if self.status_range is not None:
            low, high = self.status_range
            if low > high:
                raise ValueError(f"status_range low {low} is greater than high {high}")
        return self

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive span of codes claimed by this rule."""
        if self.status is not None:
            return (self.status, self.status)
        assert self.status_range is not None
        return self.status_range

    def matches(self, status: int) -> bool:
        low, high = self.bounds
        return low <= status <= high

    def covers(self, other: "StatusRule") -> bool:
        """True if every code claimed by ``other`` is already claimed by this rule."""
        low, high = self.bounds
        other_low, other_high = other.bounds
        return low <= other_low and other_high <= high

    def describe(self) -> str:
        if self.status is not None:
            return str(self.status)
        low, high = self.bounds
        return f"{low}-{high}"
