"""Builders for catalogue data used across the test modules."""

from .models import CombinationClass, CombinationModule, IndexOption, ModuleOffering, Session, TimetableCombination

ALL_WEEKS = tuple(range(1, 14))


def make_session(type="Lecture", day="Mon", start="0900", end="1000", venue="LT1", weeks=ALL_WEEKS):
    return Session(type=type, day=day, start_time=start, end_time=end, venue=venue, weeks=tuple(weeks))


def make_index(index_number, *sessions):
    return IndexOption(index_number=index_number, sessions=tuple(sessions))


def make_module(code, *indexes, name=None, au=3):
    return ModuleOffering(code=code, name=name or f"{code} module", au=au, indexes=tuple(indexes))


def make_class(module_code="CS1010", index_number="10001", type="Lecture", day="Mon",
               start="0900", end="1000", venue="LT1", weeks=ALL_WEEKS):
    return CombinationClass(
        module_code=module_code,
        module_name=f"{module_code} module",
        index_number=index_number,
        type=type,
        day=day,
        start_time=start,
        end_time=end,
        venue=venue,
        weeks=tuple(weeks),
    )


def make_combination(*classes):
    """Build a combination whose modules are inferred from its classes."""
    modules = {}
    for class_item in classes:
        modules.setdefault(
            class_item.module_code,
            CombinationModule(
                code=class_item.module_code,
                name=class_item.module_name,
                au=3,
                index_number=class_item.index_number,
            ),
        )
    return TimetableCombination(modules=tuple(modules.values()), classes=tuple(classes))
