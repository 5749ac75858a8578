"""
Notification system for Legal Publication Alerts.

This module handles:
- Reading every subscriber's preferences
- Matching publications against those preferences
- Sending notifications via SMS (Twilio) or email (Resend)
- Running the per-publication matching sweep
"""

from .dispatcher import NotificationDispatcher
from .match_evaluator import evaluate
from .preference_repository import PreferenceRepository
from .publication_pipeline import PublicationPipeline

__all__ = [
    'evaluate',
    'NotificationDispatcher',
    'PreferenceRepository',
    'PublicationPipeline',
]
