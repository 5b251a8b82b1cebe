from typing import Dict, Sequence

from app.core.exceptions import (
    EmptyPageError,
    InvalidComponentNameError,
    PageOverflowError,
)
from app.onboarding.schemas import ComponentAssignmentIn, PlacementRules


def count_components_per_page(
    components: Sequence[ComponentAssignmentIn], pages: Sequence[int]
) -> Dict[int, int]:
    """Count how many components land on each of the given pages"""
    counts = {page: 0 for page in pages}
    for component in components:
        if component.page_number in counts:
            counts[component.page_number] += 1
    return counts


def validate_components(
    components: Sequence[ComponentAssignmentIn],
    rules: PlacementRules,
) -> None:
    """
    Check a proposed configuration against the placement rules.

    Checks run in a fixed order and the first failure is raised:
    empty pages, then overfull pages, then unknown component names.
    Components on pages outside ``rules.pages`` are not counted but their
    names are still checked.

    Raises:
        EmptyPageError, PageOverflowError, InvalidComponentNameError
    """
    counts = count_components_per_page(components, rules.pages)

    if any(count < rules.min_per_page for count in counts.values()):
        raise EmptyPageError(
            f"Each page must have at least {_components(rules.min_per_page)}"
        )

    if any(count > rules.max_per_page for count in counts.values()):
        raise PageOverflowError(
            f"Each page can have a maximum of {_components(rules.max_per_page)}"
        )

    if any(c.component_name not in rules.allowed_components for c in components):
        raise InvalidComponentNameError(
            f"Component names must be one of: {', '.join(rules.allowed_components)}"
        )


def _components(n: int) -> str:
    words = {1: "one", 2: "two"}
    return f"{words.get(n, n)} component{'' if n == 1 else 's'}"
