"""
Demo Episode for Partograf.

Builds a three-hour example labor episode (the "fill example data" button of
the ward form) and prints its derived views.

Usage:
    python -m partograf.data.demo
    python -m partograf.data.demo --step 60
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timedelta
from typing import Callable, Optional

from partograf.config import GRID
from partograf.data.episode import Episode
from partograf.data.models import Category
from partograf.utils.time_utils import format_hours

logger = logging.getLogger(__name__)


def build_demo_episode(now: Optional[Callable[[], datetime]] = None) -> Episode:
    """
    Create an episode filled with three hours of example observations.

    Args:
        now: Clock of the episode; the example starts three hours before it.

    Returns:
        Episode with 4 examinations, 4 FHR readings, 3 vital-sign sets,
        2 therapy entries, 4 contraction entries and 2 urine entries.
    """
    clock = now or datetime.now
    episode = Episode(now=clock)
    base = clock() - timedelta(hours=3)

    def at(hours: float) -> datetime:
        return base + timedelta(hours=hours)

    labor = [
        (0, 3, 2, 2, '≤20'),
        (1, 4, 2, 3, '20–40'),
        (2, 5, 3, 4, '20–40'),
        (3, 6, 3, 5, '>40'),
    ]
    for hours, dilation, station, freq, duration in labor:
        episode.add(Category.LABOR, {
            'dilation': dilation,
            'station': station,
            'contraction_freq': freq,
            'contraction_duration': duration,
        }, at(hours))

    fetal = [
        (0.5, 140, 'none'),
        (1.0, 145, 'none'),
        (1.5, 165, '1'),
        (2.5, 150, '1'),
    ]
    for hours, heart_rate, molding in fetal:
        episode.add(Category.FETAL, {
            'heart_rate': heart_rate,
            'amniotic_fluid': 'clear',
            'molding': molding,
        }, at(hours))

    maternal = [
        (0.2, 120, 78, 82, 36.9),
        (1.2, 124, 80, 88, 37.1),
        (2.2, 142, 92, 95, 37.9),
    ]
    for hours, systolic, diastolic, pulse, temperature in maternal:
        episode.add(Category.MATERNAL, {
            'systolic': systolic,
            'diastolic': diastolic,
            'pulse': pulse,
            'temperature': temperature,
        }, at(hours))

    episode.add(Category.THERAPY, {'iv_fluid': 'RL', 'drops_per_minute': 20}, at(0.1))
    episode.add(Category.THERAPY, {
        'oxytocin_dose': '2 mU/menit',
        'oxytocin_start': '10:30',
    }, at(1.3))

    contractions = [
        (1.0, 2, '≤20'),
        (1.5, 3, '20–40'),
        (2.0, 4, '20–40'),
        (2.5, 5, '>40'),
    ]
    for hours, freq, duration in contractions:
        episode.add(Category.CONTRACTION, {
            'frequency_per_10min': freq,
            'duration': duration,
        }, at(hours))

    episode.add(Category.URINE, {'volume': 50, 'protein': 'neg', 'acetone': 'neg'}, at(0.5))
    episode.add(Category.URINE, {'volume': 100, 'protein': '+', 'acetone': 'neg'}, at(2.5))

    logger.info(f"Demo episode created: {episode}")
    return episode


def main():
    parser = argparse.ArgumentParser(
        description="Print the derived views of an example labor episode"
    )
    parser.add_argument(
        "--step",
        type=int,
        default=GRID.STEP_MINUTES,
        help="Grid step in minutes"
    )
    parser.add_argument(
        "--horizon",
        type=int,
        default=GRID.HORIZON_MINUTES,
        help="Last grid offset in minutes"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    episode = build_demo_episode()
    start = episode.start_time()
    print(f"Start time: {start:%d/%m/%Y %H:%M}")

    print("\nFHR grid:")
    for bucket in episode.fhr_buckets(args.step, args.horizon):
        if not bucket.is_empty:
            print(f"  {bucket.offset_minutes:>4} min  {bucket.value} bpm")

    print("\nReference lines:")
    for point in episode.reference_lines().points:
        print(
            f"  {point.offset_minutes:>4} min  dilation={point.dilation} "
            f"alert={point.alert:.1f} action={point.action:.1f}"
        )

    print("\nLabor progress:")
    for entry in episode.labor.sorted_entries():
        print(f"  +{format_hours(start, entry.timestamp)} h  {entry.dilation} cm")

    print("\nAlerts:")
    for message in episode.alerts():
        print(f"  - {message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
