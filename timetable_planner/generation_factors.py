"""
Generation Factors Module

Hard constraints applied to index options before the combination search.
Each constraint is a stateless predicate over the considered sessions of one
index and the user's filters, so each can be tested on its own. The index
filter runs them left to right and rejects an index at the first failure.

Example Usage:
    ```python
    filters = GenerationFilters(days_of_week=DaysOfWeek(friday=False))
    viable_modules = filter_module_indexes(modules, filters)
    ```
"""

from dataclasses import replace
from typing import Callable, List, Sequence

from .logging_config import loggers
from .models import DayStartEnd, GenerationFilters, IndexOption, ModuleOffering, Session
from .time_utils import DAY_FIELDS, normalize_day, normalize_time

logger = loggers['generation_factors']

# (keyword, ClassesToConsider field) checked in priority order; first match wins
CLASS_TYPE_KEYWORDS = (
    ("tut", "tutorial"),
    ("lab", "lab"),
    ("sem", "seminar"),
    ("lec", "lecture"),
    ("prj", "project"),
    ("des", "design"),
)

ONLINE_VENUE_KEYWORDS = ("online", "e-learn", "elearn", "virtual", "zoom", "teams")


def should_consider_class_type(session_type: str, filters: GenerationFilters) -> bool:
    """
    Check if a session type counts towards constraint checking and scoring.

    Unrecognized types are always considered.
    """
    type_lower = (session_type or "").lower()
    for keyword, category in CLASS_TYPE_KEYWORDS:
        if keyword in type_lower:
            return getattr(filters.classes_to_consider, category)
    return True


def filter_classes_by_type(index: IndexOption, filters: GenerationFilters) -> List[Session]:
    """Reduce an index's sessions to the types selected by the user."""
    return [session for session in index.sessions if should_consider_class_type(session.type, filters)]


def is_online_venue(venue: str) -> bool:
    venue_lower = (venue or "").lower()
    return any(keyword in venue_lower for keyword in ONLINE_VENUE_KEYWORDS)


def passes_venue_preference(sessions: Sequence[Session], filters: GenerationFilters) -> bool:
    """Enforce the online / in-person venue preference."""
    include_online = filters.venue_preference.include_online
    include_in_person = filters.venue_preference.include_in_person

    if include_online and include_in_person:
        return True

    has_online = any(is_online_venue(session.venue) for session in sessions)
    has_in_person = any(not is_online_venue(session.venue) for session in sessions)

    if include_online and not include_in_person and has_in_person:
        return False
    if include_in_person and not include_online and has_online:
        return False
    return True


def starts_too_early(start_time: str, day_start_end: DayStartEnd) -> bool:
    """
    True when the earliest-start limit is on and the time falls before it.

    Zero-padded 4-digit time strings compare lexically the same way they
    compare numerically. The index filter and the result audit both go
    through here, so they agree even on times that are not digits (e.g. "TBA").
    """
    return day_start_end.start_enabled and normalize_time(start_time) < normalize_time(day_start_end.start_after)


def ends_too_late(end_time: str, day_start_end: DayStartEnd) -> bool:
    """True when the latest-end limit is on and the time falls after it."""
    return day_start_end.end_enabled and normalize_time(end_time) > normalize_time(day_start_end.end_before)


def passes_day_time_constraints(sessions: Sequence[Session], filters: GenerationFilters) -> bool:
    """Enforce the earliest start / latest end of the day."""
    day_start_end = filters.day_start_end
    if not day_start_end.start_enabled and not day_start_end.end_enabled:
        return True

    for session in sessions:
        if starts_too_early(session.start_time, day_start_end):
            return False
        if ends_too_late(session.end_time, day_start_end):
            return False
    return True


def passes_day_of_week_constraints(sessions: Sequence[Session], filters: GenerationFilters) -> bool:
    """Reject sessions on disabled days. Unrecognized day tokens count as disabled."""
    days_of_week = filters.days_of_week
    if days_of_week.all_enabled():
        return True

    for session in sessions:
        day_field = DAY_FIELDS.get(normalize_day(session.day))
        if day_field is None or not getattr(days_of_week, day_field):
            return False
    return True


IndexConstraint = Callable[[Sequence[Session], GenerationFilters], bool]

INDEX_CONSTRAINTS: Sequence[IndexConstraint] = (
    passes_venue_preference,
    passes_day_time_constraints,
    passes_day_of_week_constraints,
)


def is_index_viable(index: IndexOption, filters: GenerationFilters) -> bool:
    """An index survives when it has considered sessions and they pass every constraint."""
    sessions_to_check = filter_classes_by_type(index, filters)
    if not sessions_to_check:
        return False
    return all(constraint(sessions_to_check, filters) for constraint in INDEX_CONSTRAINTS)


def filter_module_indexes(modules: Sequence[ModuleOffering], filters: GenerationFilters) -> List[ModuleOffering]:
    """
    Filter module indexes based on user preferences.

    Module and index order is preserved. Modules left without any viable
    index are dropped, since they cannot take part in any combination.

    Args:
        modules: Fully populated module offerings
        filters: The user's generation filters

    Returns:
        List[ModuleOffering]: Modules holding only their viable indexes
    """
    filtered_modules = []
    for module in modules:
        viable_indexes = tuple(index for index in module.indexes if is_index_viable(index, filters))

        if not viable_indexes:
            logger.debug(f"Dropping {module.code}: no index satisfies the filters")
            continue

        if len(viable_indexes) < len(module.indexes):
            logger.debug(
                f"{module.code}: kept {len(viable_indexes)} of {len(module.indexes)} indexes"
            )
        filtered_modules.append(replace(module, indexes=viable_indexes))

    return filtered_modules
