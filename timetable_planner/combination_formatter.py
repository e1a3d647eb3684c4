import uuid
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from .logging_config import loggers
from .models import CombinationClass, TimetableCombination
from .time_utils import DAY_ORDER, normalize_day, normalize_time, parse_time_to_minutes

logger = loggers['combination_formatter']


class CombinationFormatter:
    """
    A class to format ranked timetable combinations for API responses.

    Each formatted combination carries summary statistics (days used, total
    hours, average gap, earliest start and latest end) alongside its modules
    and classes.
    """

    def compute_stats(self, combination: TimetableCombination) -> Dict:
        """
        Summarize a combination over all of its classes.

        Args:
            combination (TimetableCombination): The combination to summarize.

        Returns:
            dict: total_days, total_hours, average_gap_duration (minutes),
            earliest_start and latest_end.
        """
        classes = combination.classes
        days = {class_item.day for class_item in classes}

        total_minutes = 0
        earliest_start = None
        latest_end = None
        classes_by_day = defaultdict(list)

        for class_item in classes:
            start = normalize_time(class_item.start_time)
            end = normalize_time(class_item.end_time)
            total_minutes += parse_time_to_minutes(end) - parse_time_to_minutes(start)

            if earliest_start is None or start < earliest_start:
                earliest_start = start
            if latest_end is None or end > latest_end:
                latest_end = end

            classes_by_day[class_item.day].append(class_item)

        total_gap_minutes = 0
        gap_count = 0
        for day_classes in classes_by_day.values():
            day_classes.sort(key=lambda c: parse_time_to_minutes(c.start_time))
            for current_class, next_class in zip(day_classes, day_classes[1:]):
                gap = parse_time_to_minutes(next_class.start_time) - parse_time_to_minutes(current_class.end_time)
                if gap > 0:
                    total_gap_minutes += gap
                    gap_count += 1

        return {
            "total_days": len(days),
            "total_hours": round(total_minutes / 60, 1),
            "average_gap_duration": round(total_gap_minutes / gap_count) if gap_count else 0,
            "earliest_start": earliest_start or "0000",
            "latest_end": latest_end or "0000",
        }

    def format_classes_by_day(self, classes: Sequence[CombinationClass]) -> Dict[str, List[str]]:
        """
        Organize classes into an ordered day -> class summary mapping.

        Days that are not recognized weekdays are listed after Sunday.
        """
        day_schedule = defaultdict(list)
        for class_item in classes:
            day_schedule[normalize_day(class_item.day)].append(
                (parse_time_to_minutes(class_item.start_time), str(class_item))
            )

        ordered_schedule = {}
        for day in DAY_ORDER:
            if day in day_schedule:
                ordered_schedule[day] = [info for _, info in sorted(day_schedule[day])]
        for day in sorted(set(day_schedule) - set(DAY_ORDER)):
            ordered_schedule[day or "TBA"] = [info for _, info in sorted(day_schedule[day])]
        return ordered_schedule

    def format_combination(self, combination: TimetableCombination) -> Dict:
        return {
            "modules": [
                {
                    "code": module.code,
                    "name": module.name,
                    "au": module.au,
                    "index_number": module.index_number,
                }
                for module in combination.modules
            ],
            "classes": [
                {
                    "module_code": class_item.module_code,
                    "module_name": class_item.module_name,
                    "index_number": class_item.index_number,
                    "type": class_item.type,
                    "day": class_item.day,
                    "start_time": class_item.start_time,
                    "end_time": class_item.end_time,
                    "venue": class_item.venue,
                    "weeks": sorted(class_item.weeks),
                }
                for class_item in combination.classes
            ],
            "days": self.format_classes_by_day(combination.classes),
            "stats": self.compute_stats(combination),
        }

    def format_ranked_combinations(
        self, ranked: Sequence[Tuple[float, TimetableCombination]], top_n: int = 100
    ) -> List[Dict]:
        """
        Format the top ranked combinations.

        Args:
            ranked (list): (score, combination) pairs, best first.
            top_n (int): The number of combinations to return. Defaults to 100.

        Returns:
            list: A list of dictionaries, each a formatted combination with id, name and score.
        """
        formatted_combinations = []
        for i, (score, combination) in enumerate(ranked[:top_n], 1):
            formatted = {
                "id": str(uuid.uuid4()),
                "name": f"Timetable {i}",
                "score": score,
            }
            formatted.update(self.format_combination(combination))
            formatted_combinations.append(formatted)

        logger.debug(f"Formatted {len(formatted_combinations)} combinations")
        return formatted_combinations
