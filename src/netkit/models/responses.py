import time
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EmptyResponse(BaseModel):
    """Result type for endpoints whose body carries nothing of interest.

    Decoding into ``EmptyResponse`` accepts any body, including an empty one.
    """

    model_config = ConfigDict(extra="ignore")


class HttpOutcome(BaseModel):
    """A completed transport call: status code, headers and raw body."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""
    url: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class CachedEntry(BaseModel):
    """A stored response owned by a response cache."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""
    url: str = ""
    stored_at: float = Field(default_factory=time.time)

    @classmethod
    def from_outcome(cls, outcome: HttpOutcome) -> "CachedEntry":
        return cls(
            status_code=outcome.status_code,
            headers=dict(outcome.headers),
            body=outcome.body,
            url=outcome.url,
        )

    def to_outcome(self) -> HttpOutcome:
        return HttpOutcome(
            status_code=self.status_code,
            headers=dict(self.headers),
            body=self.body,
            url=self.url,
        )

    @field_validator("status_code")
    @classmethod
    def validate_status_code(cls, value: int) -> int:
        if not 200 <= value <= 299:
            raise ValueError(f"Only successful responses can be cached, got {value}")
        return value
