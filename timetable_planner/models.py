"""
Timetable data model.

Plain, immutable containers for the catalogue data handed to the generation
engine and for the user's generation filters. Nothing here is persisted; the
catalogue lookup that populates these objects lives outside this package.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Session:
    """A single scheduled meeting of an index (lecture, tutorial, lab, ...)."""

    type: str
    day: str
    start_time: str
    end_time: str
    venue: str = ""
    weeks: Tuple[int, ...] = ()

    def __str__(self):
        return f"{self.type}: {self.day} {self.start_time} - {self.end_time}"

    # Order sessions by start time, then end time
    def __lt__(self, other):
        if self.start_time == other.start_time:
            return self.end_time < other.end_time
        return self.start_time < other.start_time

    def __gt__(self, other):
        if self.start_time == other.start_time:
            return self.end_time > other.end_time
        return self.start_time > other.start_time


@dataclass(frozen=True)
class IndexOption:
    """One alternative class group a student can register for."""

    index_number: str
    sessions: Tuple[Session, ...] = ()

    def __str__(self):
        return f"{self.index_number}: {len(self.sessions)} sessions"


@dataclass(frozen=True)
class ModuleOffering:
    """A module and the mutually exclusive index options offered for it."""

    code: str
    name: str
    au: float = 0
    indexes: Tuple[IndexOption, ...] = ()

    def __str__(self):
        return f"{self.code}: {self.name}"


@dataclass(frozen=True)
class ClassesToConsider:
    tutorial: bool = True
    lab: bool = True
    seminar: bool = True
    lecture: bool = True
    project: bool = True
    design: bool = True


@dataclass(frozen=True)
class VenuePreference:
    include_online: bool = True
    include_in_person: bool = True


@dataclass(frozen=True)
class DayStartEnd:
    start_after: str = "0800"
    end_before: str = "2300"
    start_enabled: bool = False
    end_enabled: bool = False


@dataclass(frozen=True)
class DaysOfWeek:
    monday: bool = True
    tuesday: bool = True
    wednesday: bool = True
    thursday: bool = True
    friday: bool = True
    saturday: bool = True
    sunday: bool = True

    def all_enabled(self) -> bool:
        return all(
            (
                self.monday,
                self.tuesday,
                self.wednesday,
                self.thursday,
                self.friday,
                self.saturday,
                self.sunday,
            )
        )


@dataclass(frozen=True)
class HourRange:
    """An allowed [min, max] range in hours, applied only when enabled."""

    min: float = 0
    max: float = 24
    enabled: bool = False

    def contains(self, hours: float) -> bool:
        return self.min <= hours <= self.max


@dataclass(frozen=True)
class DailyLoad:
    preference: str = "skewed"
    enabled: bool = False

    def __post_init__(self):
        """Validate the preference after initialization"""
        valid_preferences = {"balanced", "skewed"}
        if self.preference not in valid_preferences:
            raise ValueError(f"preference must be one of {valid_preferences}")


@dataclass(frozen=True)
class GenerationGoals:
    minimize_days: bool = False
    balance_workload: bool = False
    consecutive_days: bool = False


@dataclass(frozen=True)
class GenerationFilters:
    """
    The user's generation preferences.

    Hard constraints (class types, venue, day window, days of week) prune index
    options before the search. The remaining groups only influence scoring.
    """

    classes_to_consider: ClassesToConsider = field(default_factory=ClassesToConsider)
    venue_preference: VenuePreference = field(default_factory=VenuePreference)
    day_start_end: DayStartEnd = field(default_factory=DayStartEnd)
    days_of_week: DaysOfWeek = field(default_factory=DaysOfWeek)
    day_duration: HourRange = field(default_factory=lambda: HourRange(min=4, max=8))
    gaps_between_classes: HourRange = field(default_factory=lambda: HourRange(min=1, max=2))
    daily_load: DailyLoad = field(default_factory=DailyLoad)
    generation_goals: GenerationGoals = field(default_factory=GenerationGoals)


@dataclass(frozen=True)
class CombinationModule:
    """The index chosen for one module within a combination."""

    code: str
    name: str
    au: float
    index_number: str


@dataclass(frozen=True)
class CombinationClass:
    """A session tagged with the module and index it belongs to."""

    module_code: str
    module_name: str
    index_number: str
    type: str
    day: str
    start_time: str
    end_time: str
    venue: str = ""
    weeks: Tuple[int, ...] = ()

    @classmethod
    def from_session(cls, module: ModuleOffering, index: IndexOption, session: Session) -> "CombinationClass":
        return cls(
            module_code=module.code,
            module_name=module.name,
            index_number=index.index_number,
            type=session.type,
            day=session.day,
            start_time=session.start_time,
            end_time=session.end_time,
            venue=session.venue,
            weeks=tuple(session.weeks),
        )

    def __str__(self):
        return f"{self.module_code} ({self.type} on {self.day} {self.start_time}-{self.end_time})"


@dataclass(frozen=True)
class TimetableCombination:
    """One module -> index assignment for every requested module."""

    modules: Tuple[CombinationModule, ...]
    classes: Tuple[CombinationClass, ...]

    def index_for(self, module_code: str) -> str:
        for module in self.modules:
            if module.code == module_code:
                return module.index_number
        raise KeyError(module_code)
