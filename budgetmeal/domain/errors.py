"""Error taxonomy for the meal-plan engine."""


class MealPlanError(Exception):
    """Base class for all engine errors."""


class DataIntegrityError(MealPlanError):
    """A catalog entry is inconsistent (e.g. its total differs from the sum of its prices)."""


class ValidationError(MealPlanError):
    """A requested operation would break a plan invariant."""


class InvariantViolation(MealPlanError):
    """Programming error: an upstream contract was not honoured."""


class ExternalServiceFailure(MealPlanError):
    """The optional text-generation call failed. Never leaves the selector or analyzer."""


__all__ = [
    'MealPlanError', 'DataIntegrityError', 'ValidationError',
    'InvariantViolation', 'ExternalServiceFailure',
]
