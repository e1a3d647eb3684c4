"""
Combination Generator Module

This module enumerates clash-free timetable combinations: one index per
module, chosen so that no two selected sessions overlap. It uses a bounded
depth-first search that visits modules in the order they are given.

Key Features:
    - Week-aware clash detection between two sessions
    - Depth-first search with clash pruning at every level
    - Hard caps on recursive calls and on collected combinations
    - Explicit truncation flag when a cap stopped the search early

Example Usage:
    ```python
    generator = CombinationGenerator(filtered_modules, max_combinations=50)
    outcome = generator.generate_combinations()
    if outcome.truncated:
        ...
    ```

Note:
    When a cap is reached the returned combinations are a partial,
    not-necessarily-exhaustive subset. This is reported through
    ``GenerationOutcome.truncated`` rather than raised.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from .logging_config import loggers
from .models import CombinationClass, CombinationModule, ModuleOffering, TimetableCombination
from .time_utils import normalize_day, normalize_time

logger = loggers['combination_generator']


def has_time_clash(class1: Any, class2: Any) -> bool:
    """
    Check if two sessions conflict with each other.

    A conflict occurs when both sessions fall on the same day, their time
    ranges overlap and their active weeks overlap. A session with no known
    weeks is treated as running every week.

    Args:
        class1: First session (needs 'day', 'start_time', 'end_time', 'weeks')
        class2: Second session

    Returns:
        bool: True if the sessions clash
    """
    if normalize_day(class1.day) != normalize_day(class2.day):
        return False

    start1 = normalize_time(class1.start_time)
    end1 = normalize_time(class1.end_time)
    start2 = normalize_time(class2.start_time)
    end2 = normalize_time(class2.end_time)

    if end1 <= start2 or end2 <= start1:
        return False

    weeks1 = set(class1.weeks or ())
    weeks2 = set(class2.weeks or ())
    if not weeks1 or not weeks2:
        return True

    return bool(weeks1 & weeks2)


@dataclass(frozen=True)
class GenerationOutcome:
    """
    Result of one search.

    Attributes:
        combinations: Clash-free combinations, in discovery order
        truncated: True if a cap stopped the search before it was exhausted
        recursive_calls: Number of search-tree nodes visited
    """

    combinations: Tuple[TimetableCombination, ...]
    truncated: bool
    recursive_calls: int


class CombinationGenerator:
    """
    A generator class that enumerates clash-free timetable combinations.

    The search is depth-first with one module per level. Each index of the
    current module is accepted only if none of its sessions clash with the
    sessions already committed. Two counters bound the search; they belong to
    a single call of ``generate_combinations``.

    Attributes:
        modules (Sequence[ModuleOffering]): Filtered modules, searched in this order
        max_recursive_calls (int): Cap on search-tree nodes visited
        max_combinations (int): Cap on combinations collected
    """

    MAX_RECURSIVE_CALLS = 500000
    MAX_COMBINATIONS = 1000

    def __init__(
        self,
        modules: Sequence[ModuleOffering],
        max_recursive_calls: Optional[int] = None,
        max_combinations: Optional[int] = None,
    ) -> None:
        self.modules = list(modules)
        self.max_recursive_calls = (
            self.MAX_RECURSIVE_CALLS if max_recursive_calls is None else max_recursive_calls
        )
        self.max_combinations = (
            self.MAX_COMBINATIONS if max_combinations is None else max_combinations
        )
        self.recursive_calls = 0
        self.truncated = False

    def generate_combinations(self) -> GenerationOutcome:
        """
        Enumerate combinations up to the configured caps.

        Returns:
            GenerationOutcome: The combinations found and whether the search
            was cut short. An empty module list yields no combinations.
        """
        self.recursive_calls = 0
        self.truncated = False
        results: List[TimetableCombination] = []

        if self.modules:
            self._dfs(0, (), (), results)

        if self.truncated:
            logger.warning(
                f"Combination search truncated after {self.recursive_calls} calls "
                f"with {len(results)} combinations"
            )
        logger.debug(f"Total combinations generated: {len(results)}")

        return GenerationOutcome(
            combinations=tuple(results),
            truncated=self.truncated,
            recursive_calls=self.recursive_calls,
        )

    def _budget_exhausted(self, results: List[TimetableCombination]) -> bool:
        if self.recursive_calls >= self.max_recursive_calls or len(results) >= self.max_combinations:
            self.truncated = True
            return True
        return False

    def _dfs(
        self,
        module_index: int,
        current_combination: Tuple[CombinationModule, ...],
        all_classes: Tuple[CombinationClass, ...],
        results: List[TimetableCombination],
    ) -> None:
        """
        Recursive depth-first search over modules.

        Args:
            module_index: Position of the current module in self.modules
            current_combination: Indexes chosen so far
            all_classes: Sessions committed so far
            results: Combinations collected so far (appended in place)
        """
        self.recursive_calls += 1
        if self._budget_exhausted(results):
            return

        # Base case: every module has an index
        if module_index == len(self.modules):
            results.append(TimetableCombination(modules=current_combination, classes=all_classes))
            return

        module = self.modules[module_index]
        for index in module.indexes:
            if self._budget_exhausted(results):
                break

            index_classes = tuple(
                CombinationClass.from_session(module, index, session) for session in index.sessions
            )
            if not self._is_valid_addition(all_classes, index_classes):
                continue

            chosen = CombinationModule(
                code=module.code,
                name=module.name,
                au=module.au,
                index_number=index.index_number,
            )
            self._dfs(
                module_index + 1,
                current_combination + (chosen,),
                all_classes + index_classes,
                results,
            )

    @staticmethod
    def _is_valid_addition(
        current_classes: Sequence[CombinationClass], new_classes: Sequence[CombinationClass]
    ) -> bool:
        """True if none of the new sessions clash with a committed one."""
        for new_class in new_classes:
            for existing_class in current_classes:
                if has_time_clash(new_class, existing_class):
                    return False
        return True


def generate_combinations(
    modules: Sequence[ModuleOffering],
    max_recursive_calls: Optional[int] = None,
    max_combinations: Optional[int] = None,
) -> GenerationOutcome:
    """Generate every clash-free combination of the given modules, within the caps."""
    generator = CombinationGenerator(modules, max_recursive_calls, max_combinations)
    return generator.generate_combinations()
