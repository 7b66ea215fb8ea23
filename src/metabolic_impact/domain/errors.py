"""Exceptions raised by caller-side validation."""


class MetabolicImpactError(Exception):
    """Base error for the metabolic impact package."""


class MealValidationError(MetabolicImpactError):
    """Raised when a meal violates its data contract."""

    def __init__(self, meal_id: str, problems: list[str]) -> None:
        self.meal_id = meal_id
        self.problems = problems
        super().__init__(f"Invalid meal '{meal_id}': {'; '.join(problems)}")


class ReadingParseError(MetabolicImpactError):
    """Raised when a glucose reading cannot be parsed."""

    def __init__(self, raw: object, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Cannot parse glucose reading {raw!r}: {reason}")
