"""
Analysis module for Partograf.

This module provides the clinical alert engine.

Usage:
    >>> from partograf.analysis import evaluate_alerts
    >>> evaluate_alerts(episode)
"""

from .alerts import evaluate_alerts, check_clinical_alerts, ClinicalAlert, AlertKind

__all__ = [
    'evaluate_alerts',
    'check_clinical_alerts',
    'ClinicalAlert',
    'AlertKind',
]
