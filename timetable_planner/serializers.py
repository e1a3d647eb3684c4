import re

from rest_framework import serializers

from .models import (
    ClassesToConsider,
    CombinationClass,
    CombinationModule,
    DailyLoad,
    DayStartEnd,
    DaysOfWeek,
    GenerationFilters,
    GenerationGoals,
    HourRange,
    IndexOption,
    ModuleOffering,
    Session,
    TimetableCombination,
    VenuePreference,
)
from .time_utils import normalize_time_value

HHMM_RE = re.compile(r"^([01]\d|2[0-3])[0-5]\d$")


def _normalized_time(value):
    normalized = normalize_time_value(value)
    if not HHMM_RE.match(normalized):
        raise serializers.ValidationError(f"'{value}' has invalid time format (expected HH:MM or HHMM)")
    return normalized


class ClassesToConsiderSerializer(serializers.Serializer):
    tutorial = serializers.BooleanField(default=True)
    lab = serializers.BooleanField(default=True)
    seminar = serializers.BooleanField(default=True)
    lecture = serializers.BooleanField(default=True)
    project = serializers.BooleanField(default=True)
    design = serializers.BooleanField(default=True)

    def validate(self, attrs):
        if not any(attrs.values()):
            raise serializers.ValidationError("At least one class type must be selected")
        return attrs


class VenuePreferenceSerializer(serializers.Serializer):
    include_online = serializers.BooleanField(default=True)
    include_in_person = serializers.BooleanField(default=True)

    def validate(self, attrs):
        if not attrs["include_online"] and not attrs["include_in_person"]:
            raise serializers.ValidationError("At least one venue type must be selected")
        return attrs


class DayStartEndSerializer(serializers.Serializer):
    start_after = serializers.CharField(default="0800")
    end_before = serializers.CharField(default="2300")
    start_enabled = serializers.BooleanField(default=False)
    end_enabled = serializers.BooleanField(default=False)

    def validate_start_after(self, value):
        return _normalized_time(value)

    def validate_end_before(self, value):
        return _normalized_time(value)


class DaysOfWeekSerializer(serializers.Serializer):
    monday = serializers.BooleanField(default=True)
    tuesday = serializers.BooleanField(default=True)
    wednesday = serializers.BooleanField(default=True)
    thursday = serializers.BooleanField(default=True)
    friday = serializers.BooleanField(default=True)
    saturday = serializers.BooleanField(default=True)
    sunday = serializers.BooleanField(default=True)


class HourRangeSerializer(serializers.Serializer):
    min = serializers.FloatField(min_value=0, default=0)
    max = serializers.FloatField(min_value=0, default=24)
    enabled = serializers.BooleanField(default=False)

    def validate(self, attrs):
        if attrs["min"] > attrs["max"]:
            raise serializers.ValidationError("min cannot be greater than max")
        return attrs


class DayDurationSerializer(HourRangeSerializer):
    min = serializers.FloatField(min_value=0, default=4)
    max = serializers.FloatField(min_value=0, default=8)


class GapsBetweenClassesSerializer(HourRangeSerializer):
    min = serializers.FloatField(min_value=0, default=1)
    max = serializers.FloatField(min_value=0, default=2)


class DailyLoadSerializer(serializers.Serializer):
    preference = serializers.ChoiceField(choices=["balanced", "skewed"], default="skewed")
    enabled = serializers.BooleanField(default=False)


class GenerationGoalsSerializer(serializers.Serializer):
    minimize_days = serializers.BooleanField(default=False)
    balance_workload = serializers.BooleanField(default=False)
    consecutive_days = serializers.BooleanField(default=False)


class GenerationFiltersSerializer(serializers.Serializer):
    """Every group is optional; missing groups and fields take the planner defaults."""

    classes_to_consider = ClassesToConsiderSerializer(required=False)
    venue_preference = VenuePreferenceSerializer(required=False)
    day_start_end = DayStartEndSerializer(required=False)
    days_of_week = DaysOfWeekSerializer(required=False)
    day_duration = DayDurationSerializer(required=False)
    gaps_between_classes = GapsBetweenClassesSerializer(required=False)
    daily_load = DailyLoadSerializer(required=False)
    generation_goals = GenerationGoalsSerializer(required=False)


def build_filters(data):
    """Turn validated GenerationFiltersSerializer data into GenerationFilters."""
    data = data or {}
    defaults = GenerationFilters()
    return GenerationFilters(
        classes_to_consider=ClassesToConsider(**data.get("classes_to_consider", {})),
        venue_preference=VenuePreference(**data.get("venue_preference", {})),
        day_start_end=DayStartEnd(**data.get("day_start_end", {})),
        days_of_week=DaysOfWeek(**data.get("days_of_week", {})),
        day_duration=HourRange(**data["day_duration"]) if "day_duration" in data else defaults.day_duration,
        gaps_between_classes=(
            HourRange(**data["gaps_between_classes"])
            if "gaps_between_classes" in data
            else defaults.gaps_between_classes
        ),
        daily_load=DailyLoad(**data.get("daily_load", {})),
        generation_goals=GenerationGoals(**data.get("generation_goals", {})),
    )


class SessionSerializer(serializers.Serializer):
    type = serializers.CharField(allow_blank=True)
    day = serializers.CharField(allow_blank=True)
    start_time = serializers.CharField(allow_blank=True)
    end_time = serializers.CharField(allow_blank=True)
    venue = serializers.CharField(allow_blank=True, default="")
    weeks = serializers.ListField(child=serializers.IntegerField(min_value=1), default=list)

    def validate_start_time(self, value):
        return normalize_time_value(value)

    def validate_end_time(self, value):
        return normalize_time_value(value)


class IndexOptionSerializer(serializers.Serializer):
    index_number = serializers.CharField()
    sessions = SessionSerializer(many=True)


class ModuleOfferingSerializer(serializers.Serializer):
    code = serializers.CharField()
    name = serializers.CharField(allow_blank=True, default="")
    au = serializers.FloatField(min_value=0, default=0)
    indexes = IndexOptionSerializer(many=True)


def build_session(data):
    return Session(
        type=data["type"],
        day=data["day"],
        start_time=data["start_time"],
        end_time=data["end_time"],
        venue=data.get("venue", ""),
        weeks=tuple(data.get("weeks", ())),
    )


def build_module(data):
    return ModuleOffering(
        code=data["code"],
        name=data.get("name", ""),
        au=data.get("au", 0),
        indexes=tuple(
            IndexOption(
                index_number=index["index_number"],
                sessions=tuple(build_session(session) for session in index["sessions"]),
            )
            for index in data["indexes"]
        ),
    )


# The search recurses once per module
MAX_MODULES = 50


class GenerateTimetableSerializer(serializers.Serializer):
    modules = ModuleOfferingSerializer(many=True, allow_empty=False)
    filters = GenerationFiltersSerializer(required=False)

    def validate_modules(self, value):
        if len(value) > MAX_MODULES:
            raise serializers.ValidationError(f"At most {MAX_MODULES} modules can be planned at once")
        codes = [module["code"] for module in value]
        if len(set(codes)) != len(codes):
            raise serializers.ValidationError("Duplicate module codes found")
        return value

    def to_request(self):
        """Return (modules, filters) built from the validated payload."""
        modules = [build_module(module) for module in self.validated_data["modules"]]
        filters = build_filters(self.validated_data.get("filters"))
        return modules, filters


class CombinationModuleSerializer(serializers.Serializer):
    code = serializers.CharField()
    name = serializers.CharField(allow_blank=True, default="")
    au = serializers.FloatField(min_value=0, default=0)
    index_number = serializers.CharField()


class CombinationClassSerializer(SessionSerializer):
    module_code = serializers.CharField()
    module_name = serializers.CharField(allow_blank=True, default="")
    index_number = serializers.CharField()


class CombinationSerializer(serializers.Serializer):
    modules = CombinationModuleSerializer(many=True, allow_empty=False)
    classes = CombinationClassSerializer(many=True)


class ValidateTimetableSerializer(serializers.Serializer):
    combination = CombinationSerializer()
    filters = GenerationFiltersSerializer(required=False)

    def to_request(self):
        """Return (combination, filters) built from the validated payload."""
        combination_data = self.validated_data["combination"]
        combination = TimetableCombination(
            modules=tuple(CombinationModule(**module) for module in combination_data["modules"]),
            classes=tuple(
                CombinationClass(
                    module_code=class_item["module_code"],
                    module_name=class_item.get("module_name", ""),
                    index_number=class_item["index_number"],
                    type=class_item["type"],
                    day=class_item["day"],
                    start_time=class_item["start_time"],
                    end_time=class_item["end_time"],
                    venue=class_item.get("venue", ""),
                    weeks=tuple(class_item.get("weeks", ())),
                )
                for class_item in combination_data["classes"]
            ),
        )
        filters = build_filters(self.validated_data.get("filters"))
        return combination, filters
