"""
Result Validator Module

Audits timetable combinations after generation, or a single timetable
submitted by a user. Unlike the index filter, which only needs a pass/fail
answer, the validator reports every violation it finds in readable form.
"""

from dataclasses import dataclass, field
from itertools import combinations as pairs
from typing import List, Sequence

from .combination_generator import has_time_clash
from .generation_factors import ends_too_late, is_online_venue, should_consider_class_type, starts_too_early
from .logging_config import loggers
from .models import GenerationFilters, TimetableCombination
from .time_utils import DAY_FIELDS, normalize_day

logger = loggers['result_validator']


@dataclass
class ValidationReport:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self):
        return {"valid": self.valid, "errors": list(self.errors), "warnings": list(self.warnings)}


def validate_combination(
    combination: TimetableCombination, filters: GenerationFilters, label: str = "Combination"
) -> List[str]:
    """
    Check one combination for clashes between modules and for filter violations.

    Args:
        combination: The combination to audit
        filters: The filters it was generated under
        label: Prefix used in every error message

    Returns:
        List[str]: One message per violation, empty when the combination is valid
    """
    errors = []

    # Sessions of the same index are registered together and never compete
    for class1, class2 in pairs(combination.classes, 2):
        if class1.module_code == class2.module_code:
            continue
        if has_time_clash(class1, class2):
            errors.append(f"{label}: Time clash detected between {class1} and {class2}")

    considered = [c for c in combination.classes if should_consider_class_type(c.type, filters)]

    days_of_week = filters.days_of_week
    if not days_of_week.all_enabled():
        for class_item in considered:
            day = normalize_day(class_item.day)
            day_field = DAY_FIELDS.get(day)
            if day_field and not getattr(days_of_week, day_field):
                errors.append(
                    f"{label}: Class {class_item.module_code} {class_item.type} on {class_item.day} "
                    f"violates day filter ({day} not selected)"
                )

    venue = filters.venue_preference
    if not venue.include_online or not venue.include_in_person:
        for class_item in considered:
            online = is_online_venue(class_item.venue)
            if online and not venue.include_online:
                errors.append(
                    f"{label}: Class {class_item.module_code} {class_item.type} has online venue "
                    f"'{class_item.venue}' but online classes are not allowed"
                )
            if not online and not venue.include_in_person:
                errors.append(
                    f"{label}: Class {class_item.module_code} {class_item.type} has in-person venue "
                    f"'{class_item.venue}' but in-person classes are not allowed"
                )

    day_start_end = filters.day_start_end
    for class_item in considered:
        if starts_too_early(class_item.start_time, day_start_end):
            errors.append(
                f"{label}: Class {class_item.module_code} {class_item.type} starts at "
                f"{class_item.start_time}, before allowed start time {day_start_end.start_after}"
            )
    for class_item in considered:
        if ends_too_late(class_item.end_time, day_start_end):
            errors.append(
                f"{label}: Class {class_item.module_code} {class_item.type} ends at "
                f"{class_item.end_time}, after allowed end time {day_start_end.end_before}"
            )

    return errors


def validate_generated_results(
    combinations: Sequence[TimetableCombination],
    filters: GenerationFilters,
    requested_codes: Sequence[str],
) -> ValidationReport:
    """Audit every generated combination and check each requested module appears somewhere."""
    errors = []
    warnings = []

    if not combinations:
        warnings.append("No combinations generated - all indexes may have been filtered out")
        return ValidationReport(valid=True, errors=errors, warnings=warnings)

    for i, combination in enumerate(combinations):
        errors.extend(validate_combination(combination, filters, label=f"Combination[{i}]"))

    for code in requested_codes:
        if not any(module.code == code for combination in combinations for module in combination.modules):
            warnings.append(f"Module {code} does not appear in any generated combination")

    if errors:
        logger.error(
            f"Found {len(errors)} validation error(s) in {len(combinations)} generated combinations: "
            f"{errors[:5]}"
        )

    return ValidationReport(valid=not errors, errors=errors, warnings=warnings)


def combination_warnings(combination: TimetableCombination) -> List[str]:
    """Flag classes and modules that do not line up with each other."""
    warnings = []
    chosen = {module.code: module.index_number for module in combination.modules}

    for class_item in combination.classes:
        if class_item.module_code not in chosen:
            warnings.append(f"Class {class_item} belongs to module {class_item.module_code}, which is not selected")
        elif chosen[class_item.module_code] != class_item.index_number:
            warnings.append(
                f"Class {class_item} belongs to index {class_item.index_number}, "
                f"but index {chosen[class_item.module_code]} is selected"
            )

    with_classes = {class_item.module_code for class_item in combination.classes}
    for code in chosen:
        if code not in with_classes:
            warnings.append(f"Module {code} has no classes")
    return warnings
