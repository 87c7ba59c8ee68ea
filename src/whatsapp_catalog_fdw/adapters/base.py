"""
Base protocols for data source adapters.

Adapters expose a lightweight connectivity check on top of their API client so
operators can confirm credentials before a query engine starts scanning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


@dataclass(slots=True)
class VerificationResult:
    """
    Structured response returned by adapter verification routines.

    Attributes
    ----------
    success:
        Indicates whether the verification succeeded.
    message:
        Human-readable summary.
    details:
        Optional structured metadata such as the number of products visible.
    """

    success: bool
    message: str
    details: Optional[Mapping[str, object]] = None


class DataSourceAdapter(Protocol):
    """Protocol implemented by data source adapters."""

    def verify(self) -> VerificationResult:
        """Perform a lightweight connectivity check."""

    @property
    def source_id(self) -> str:
        """Stable identifier of the remote source."""
