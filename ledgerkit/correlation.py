"""Correlation identifiers for tracing requests across services."""

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class CorrelationId:
    """An identifier shared by everything done for one request."""

    value: str

    @classmethod
    def generate(cls) -> "CorrelationId":
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value