"""Shared contracts for validated run parameters."""

from .stamping import AttributeOverrides, StampArguments, StampRequestModel

__all__ = [
    "AttributeOverrides",
    "StampArguments",
    "StampRequestModel",
]
