"""
Combination Scoring Module

This module scores timetable combinations against the user's generation
filters. The score starts from a baseline and every enabled preference adds
or subtracts a fixed adjustment, so scores are unbounded in both directions
and only meaningful relative to each other.

Key Features:
    - Day duration and gap penalties per day
    - Balanced or skewed daily load rewards
    - Generation goals: minimize days, balance workload, consecutive days
    - Caching of repeated class tuples

Example Usage:
    ```python
    scorer = TimetableScorer(filters)
    score = scorer.score_combination(combination)
    ```

Note:
    A non-consecutive day pattern under the consecutive-days goal costs
    NON_CONSECUTIVE_DAYS_PENALTY, which pushes the combination below every
    consecutive one without removing it from the results.
"""

from collections import defaultdict
from functools import lru_cache
from typing import Dict, List, Tuple

from .generation_factors import should_consider_class_type
from .logging_config import loggers
from .models import CombinationClass, GenerationFilters, TimetableCombination
from .time_utils import day_index, duration_in_hours, normalize_day, parse_time_to_minutes

logger = loggers['combination_scoring']

BASELINE_SCORE = 100
DAY_DURATION_PENALTY = 20
GAP_PENALTY = 10
DAILY_LOAD_WEIGHT = 5
UNUSED_DAY_REWARD = 20
BALANCE_WORKLOAD_REWARD = 30
BALANCE_VARIANCE_WEIGHT = 10
CONSECUTIVE_DAYS_REWARD = 50
NON_CONSECUTIVE_DAYS_PENALTY = 10000
DAYS_IN_WEEK = 7


class TimetableScorer:
    """A scoring system that evaluates combinations based on user filters."""

    def __init__(self, filters: GenerationFilters) -> None:
        self.filters = filters
        # Cache lives and dies with this scorer, one scorer per filter set
        self.score_classes = lru_cache(maxsize=1024)(self._score_classes)

    def score_combination(self, combination: TimetableCombination) -> float:
        """Calculate the score for a combination. Higher is better."""
        return self.score_classes(tuple(combination.classes))

    def _score_classes(self, classes: Tuple[CombinationClass, ...]) -> float:
        classes_by_day = self._group_by_day(classes)

        score = BASELINE_SCORE
        score += self._day_duration_adjustment(classes_by_day)
        score += self._gap_adjustment(classes_by_day)
        score += self._daily_load_adjustment(classes_by_day)
        score += self._generation_goal_adjustment(classes_by_day)

        logger.debug(f"Scored {len(classes)} classes over {len(classes_by_day)} days: {score}")
        return score

    def _group_by_day(self, classes: Tuple[CombinationClass, ...]) -> Dict[str, List[CombinationClass]]:
        """
        Group considered classes by day, each day sorted by start time.

        Days are keyed by their normalized three-letter token rather than the raw
        string, so "Monday" and "MON" count as the same day.
        """
        classes_by_day = defaultdict(list)
        for class_item in classes:
            if should_consider_class_type(class_item.type, self.filters):
                classes_by_day[normalize_day(class_item.day)].append(class_item)

        for day_classes in classes_by_day.values():
            day_classes.sort(key=lambda c: parse_time_to_minutes(c.start_time))
        return dict(classes_by_day)

    def _day_duration_adjustment(self, classes_by_day: Dict[str, List[CombinationClass]]) -> float:
        day_duration = self.filters.day_duration
        if not day_duration.enabled:
            return 0

        adjustment = 0
        for day_classes in classes_by_day.values():
            latest_end = max((c.end_time for c in day_classes), key=parse_time_to_minutes)
            duration = duration_in_hours(day_classes[0].start_time, latest_end)
            if not day_duration.contains(duration):
                adjustment -= DAY_DURATION_PENALTY
        return adjustment

    def _gap_adjustment(self, classes_by_day: Dict[str, List[CombinationClass]]) -> float:
        gaps = self.filters.gaps_between_classes
        if not gaps.enabled:
            return 0

        adjustment = 0
        for day_classes in classes_by_day.values():
            for current_class, next_class in zip(day_classes, day_classes[1:]):
                gap = duration_in_hours(current_class.end_time, next_class.start_time)
                if not gaps.contains(gap):
                    adjustment -= GAP_PENALTY
        return adjustment

    def _daily_load_adjustment(self, classes_by_day: Dict[str, List[CombinationClass]]) -> float:
        daily_load = self.filters.daily_load
        if not daily_load.enabled:
            return 0

        days_used = len(classes_by_day)
        if daily_load.preference == "balanced":
            return days_used * DAILY_LOAD_WEIGHT
        return -days_used * DAILY_LOAD_WEIGHT

    def _generation_goal_adjustment(self, classes_by_day: Dict[str, List[CombinationClass]]) -> float:
        goals = self.filters.generation_goals
        days_used = len(classes_by_day)
        adjustment = 0

        if goals.minimize_days:
            adjustment += (DAYS_IN_WEEK - days_used) * UNUSED_DAY_REWARD

        if goals.balance_workload and days_used > 0:
            counts = [len(day_classes) for day_classes in classes_by_day.values()]
            mean = sum(counts) / days_used
            variance = sum((count - mean) ** 2 for count in counts) / days_used
            adjustment += max(0, BALANCE_WORKLOAD_REWARD - variance * BALANCE_VARIANCE_WEIGHT)

        if goals.consecutive_days:
            if self._is_consecutive(classes_by_day):
                adjustment += CONSECUTIVE_DAYS_REWARD
            else:
                adjustment -= NON_CONSECUTIVE_DAYS_PENALTY

        return adjustment

    @staticmethod
    def _is_consecutive(classes_by_day: Dict[str, List[CombinationClass]]) -> bool:
        if len(classes_by_day) <= 1:
            return True

        used_days = sorted(
            index for index in (day_index(day) for day in classes_by_day) if index != -1
        )
        return all(next_day - day == 1 for day, next_day in zip(used_days, used_days[1:]))


def score_combination(combination: TimetableCombination, filters: GenerationFilters) -> float:
    """Score a single combination against the given filters."""
    return TimetableScorer(filters).score_combination(combination)
