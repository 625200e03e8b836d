"""
Domain models and value objects.

Contains the integration domain types: SamplingRule, FailureReason, Interval,
IntegrationRequest, SubintervalSample.
"""

from src.core.domain.integration import (
    FailureReason,
    IntegrationRequest,
    Interval,
    SamplingRule,
    SubintervalSample,
)

__all__ = [
    "FailureReason",
    "IntegrationRequest",
    "Interval",
    "SamplingRule",
    "SubintervalSample",
]
