"""Validation package."""

from financehub.validation.validator import RecordValidator

__all__ = ["RecordValidator"]
