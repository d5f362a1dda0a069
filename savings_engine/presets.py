"""
Form defaults and the catalog of example scenarios.
"""

from .models import (
    ANNUAL_RETURN_PERCENT,
    CURRENT_SAVINGS,
    GOAL_AMOUNT,
    TIME_HORIZON_YEARS,
    Example,
)

DEFAULT_VALUES = {
    GOAL_AMOUNT: "50000",
    TIME_HORIZON_YEARS: "5",
    ANNUAL_RETURN_PERCENT: "7",
    CURRENT_SAVINGS: "0",
}

EXAMPLES = (
    Example(key="emergency", name="Emergency Fund", goal="15000", time="2", return_rate="4"),
    Example(key="house", name="House Down Payment", goal="80000", time="7", return_rate="6"),
    Example(key="college", name="College Fund", goal="120000", time="15", return_rate="7"),
    Example(key="retirement", name="Retirement", goal="1000000", time="30", return_rate="8"),
)


def get_example(key: str) -> Example:
    """Look up a preset by key. Raises KeyError when it does not exist."""
    for example in EXAMPLES:
        if example.key == key:
            return example
    raise KeyError(f"Unknown example: {key}")


def example_values(example: Example) -> dict[str, str]:
    """Field text for a preset. Current savings always restart at 0."""
    return {
        GOAL_AMOUNT: example.goal,
        TIME_HORIZON_YEARS: example.time,
        ANNUAL_RETURN_PERCENT: example.return_rate,
        CURRENT_SAVINGS: "0",
    }
