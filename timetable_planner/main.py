import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .combination_formatter import CombinationFormatter
from .combination_generator import CombinationGenerator
from .combination_scoring import TimetableScorer
from .exceptions import GeneratedResultsInvalid
from .generation_factors import filter_module_indexes
from .logging_config import loggers
from .models import GenerationFilters, ModuleOffering
from .result_validator import validate_generated_results

logger = loggers['main']

MAX_RESULTS = 100
GENERATION_TIMEOUT_SECONDS = 90


@dataclass
class GenerationResult:
    combinations: List[Dict] = field(default_factory=list)
    generated_at: str = ""
    total_combinations: int = 0
    returned_count: int = 0
    has_more: bool = False
    truncated: bool = False
    timed_out: bool = False
    warnings: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            "combinations": self.combinations,
            "generated_at": self.generated_at,
            "total_combinations": self.total_combinations,
            "returned_count": self.returned_count,
            "has_more": self.has_more,
            "truncated": self.truncated,
            "timed_out": self.timed_out,
            "warnings": self.warnings,
        }


def _now():
    return datetime.now(timezone.utc).isoformat()


def _run_with_timeout(generator: CombinationGenerator, timeout: Optional[float]):
    """
    Run the search on a worker thread and wait at most `timeout` seconds.

    The search never polls for cancellation, so a timed out worker keeps
    running in the background until one of its caps stops it. An exception
    raised by the search is re-raised on the calling thread.
    """
    outcome = []
    failure = []

    def search():
        try:
            outcome.append(generator.generate_combinations())
        except Exception as e:
            failure.append(e)

    thread = threading.Thread(target=search, daemon=True)
    thread.start()
    thread.join(timeout=timeout)

    if thread.is_alive():
        return None
    if failure:
        raise failure[0]
    return outcome[0]


def generate_timetables(
    modules: Sequence[ModuleOffering],
    filters: GenerationFilters,
    max_results: int = MAX_RESULTS,
    timeout: Optional[float] = GENERATION_TIMEOUT_SECONDS,
    generator_options: Optional[Dict] = None,
) -> GenerationResult:
    """
    Main function to generate, rank and format timetables for the given modules.

    This function orchestrates the entire process of filtering index options,
    enumerating clash-free combinations, auditing and scoring them, and
    formatting the best ones.

    Args:
        modules (list): Fully populated ModuleOffering objects.
        filters (GenerationFilters): The user's generation filters.
        max_results (int, optional): The maximum number of combinations to return. Defaults to 100.
        timeout (float, optional): Seconds to wait for the search. None waits forever.
        generator_options (dict, optional): Keyword overrides for CombinationGenerator caps.

    Returns:
        GenerationResult: The ranked, formatted combinations and generation metadata.

    Raises:
        GeneratedResultsInvalid: If a generated combination fails the audit.
    """
    logger.info(f"Generating timetables for modules: {[module.code for module in modules]}")
    logger.debug(f"Filters: {filters}")

    if not modules:
        logger.warning("No modules supplied. Aborting timetable generation.")
        return GenerationResult(generated_at=_now())

    # Step 1: Drop index options that violate hard constraints
    filtered_modules = filter_module_indexes(modules, filters)
    if len(filtered_modules) < len(modules):
        logger.warning("Some modules have no valid indexes after filtering.")

    # Step 2: Enumerate clash-free combinations
    generator = CombinationGenerator(filtered_modules, **(generator_options or {}))
    outcome = _run_with_timeout(generator, timeout)
    if outcome is None:
        logger.error(f"Timetable generation timed out after {timeout} seconds")
        return GenerationResult(generated_at=_now(), timed_out=True)

    logger.info(f"Generated {len(outcome.combinations)} combinations in {outcome.recursive_calls} calls")

    # Step 3: Audit the generated combinations
    report = validate_generated_results(
        outcome.combinations, filters, [module.code for module in modules]
    )
    if not report.valid:
        raise GeneratedResultsInvalid(
            "Generated timetables failed validation",
            details={"errors": report.errors, "warnings": report.warnings},
        )
    for warning in report.warnings:
        logger.warning(warning)

    if not outcome.combinations:
        return GenerationResult(
            generated_at=_now(), truncated=outcome.truncated, warnings=report.warnings
        )

    # Step 4: Score and rank, best first; ties keep discovery order
    scorer = TimetableScorer(filters)
    ranked = sorted(
        ((scorer.score_combination(combination), combination) for combination in outcome.combinations),
        key=lambda pair: pair[0],
        reverse=True,
    )

    # Step 5: Format the top N combinations for display
    formatter = CombinationFormatter()
    formatted = formatter.format_ranked_combinations(ranked, top_n=max_results)

    return GenerationResult(
        combinations=formatted,
        generated_at=_now(),
        total_combinations=len(ranked),
        returned_count=len(formatted),
        has_more=len(ranked) > max_results,
        truncated=outcome.truncated,
        warnings=report.warnings,
    )
