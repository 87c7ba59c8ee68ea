"""
Adapters for the remote catalog service.
"""

from .base import DataSourceAdapter, VerificationResult

__all__ = [
    "DataSourceAdapter",
    "VerificationResult",
]
