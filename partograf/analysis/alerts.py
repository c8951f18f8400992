"""
Clinical Alert Engine for Partograf.

Maps the current contents of an episode to a list of warning messages in
Indonesian. Rules are evaluated in a fixed order against the LATEST entry of
each stream (last inserted, not latest timestamp):

    1. Fetal heart rate outside 100-180 bpm
    2. Hypertension: systolic >= 140 or diastolic >= 90 mmHg
    3. Fever: temperature >= 38 °C
    4. Dilation below the action line expected since the first examination

The engine is stateless: every call recomputes from scratch, with no
de-duplication and no acknowledgement state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, List, Optional

from partograf.config import MESSAGES, THRESHOLDS

if TYPE_CHECKING:
    from partograf.data.episode import Episode

logger = logging.getLogger(__name__)


class AlertKind(Enum):
    """Clinical alert rules, in evaluation order."""

    FHR_OUT_OF_RANGE = auto()
    HYPERTENSION = auto()
    FEVER = auto()
    ACTION_LINE_CROSSED = auto()


@dataclass(frozen=True)
class ClinicalAlert:
    """
    A single clinical warning.

    Attributes:
        kind: The rule that fired.
        message: Indonesian message shown to the midwife.
        value: The reading that triggered the rule.
    """

    kind: AlertKind
    message: str
    value: Optional[Any] = None


def _literal(value: float) -> str:
    """Render a number the way it was entered: 79 -> '79', 37.5 -> '37.5'."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _check_fetal(episode: Episode) -> Optional[ClinicalAlert]:
    last = episode.fetal.latest()
    if last is None:
        return None
    if last.heart_rate < THRESHOLDS.FHR_MIN or last.heart_rate > THRESHOLDS.FHR_MAX:
        return ClinicalAlert(
            kind=AlertKind.FHR_OUT_OF_RANGE,
            message=MESSAGES.ALERT_FHR_OUT_OF_RANGE.format(value=_literal(last.heart_rate)),
            value=last.heart_rate
        )
    return None


def _check_blood_pressure(episode: Episode) -> Optional[ClinicalAlert]:
    last = episode.maternal.latest()
    if last is None:
        return None
    if last.systolic >= THRESHOLDS.SYSTOLIC_HIGH or last.diastolic >= THRESHOLDS.DIASTOLIC_HIGH:
        return ClinicalAlert(
            kind=AlertKind.HYPERTENSION,
            message=MESSAGES.ALERT_HYPERTENSION.format(
                systolic=_literal(last.systolic),
                diastolic=_literal(last.diastolic)
            ),
            value=(last.systolic, last.diastolic)
        )
    return None


def _check_temperature(episode: Episode) -> Optional[ClinicalAlert]:
    last = episode.maternal.latest()
    if last is None:
        return None
    if last.temperature >= THRESHOLDS.FEVER_TEMPERATURE:
        return ClinicalAlert(
            kind=AlertKind.FEVER,
            message=MESSAGES.ALERT_FEVER.format(value=last.temperature),
            value=last.temperature
        )
    return None


def _check_action_line(episode: Episode) -> Optional[ClinicalAlert]:
    """
    Compare the last examination against the action line.

    The expected alert-line dilation starts from the FIRST examination's own
    dilation (not the 2 cm chart baseline) and rises 1 cm/hour.
    """
    first = episode.labor.first()
    last = episode.labor.latest()
    if first is None:
        return None

    hours_since = (last.timestamp - first.timestamp).total_seconds() / 3600
    expected_alert = max(
        0.0, first.dilation + hours_since * THRESHOLDS.DILATION_RATE_CM_PER_HOUR
    )
    expected_action = expected_alert - THRESHOLDS.ACTION_LINE_OFFSET_CM

    if last.dilation < expected_action:
        return ClinicalAlert(
            kind=AlertKind.ACTION_LINE_CROSSED,
            message=MESSAGES.ALERT_ACTION_LINE,
            value=last.dilation
        )
    return None


RULES = (
    _check_fetal,
    _check_blood_pressure,
    _check_temperature,
    _check_action_line,
)


def check_clinical_alerts(episode: Episode) -> List[ClinicalAlert]:
    """
    Evaluate every clinical rule against the latest readings.

    Args:
        episode: The labor episode.

    Returns:
        Fired alerts in rule order.
    """
    alerts = [alert for alert in (rule(episode) for rule in RULES) if alert is not None]
    if alerts:
        logger.info(
            f"Clinical alerts: {', '.join(a.kind.name for a in alerts)}"
        )
    return alerts


def evaluate_alerts(episode: Episode) -> List[str]:
    """
    Evaluate the clinical rules and return their messages.

    Example:
        >>> evaluate_alerts(episode)
        ['Tekanan darah tinggi: 142/92 mmHg']
    """
    return [alert.message for alert in check_clinical_alerts(episode)]


__all__ = [
    'AlertKind',
    'ClinicalAlert',
    'check_clinical_alerts',
    'evaluate_alerts',
]
