"""
Form defense pipeline for the marketing site.
Sanitizes, validates and rate-limits form submissions before they are sent.
"""

from .gate import SubmissionGate, SubmissionVerdict, SubmissionReason, ValidationVerdict

__all__ = ["SubmissionGate", "SubmissionVerdict", "SubmissionReason", "ValidationVerdict"]
