"""
Domain exceptions for pricing app.

Exception Hierarchy:
    PricingError (base)
    ├── InvalidSpecification
    ├── InvalidRuleSet
    └── RuleSetMismatch

A missing rule for an option value (unknown paper type, unknown lamination
size) is not an error: it resolves to a neutral default and is logged.
"""


class PricingError(Exception):
    """Base exception for pricing errors."""
    pass


class InvalidSpecification(PricingError):
    """
    Raised when a specification cannot be priced.

    ``field`` names the offending specification field.

    Example:
        raise InvalidSpecification('width_ft', 'Must be greater than 0.')
    """

    def __init__(self, field, message):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidRuleSet(PricingError):
    """Raised when a service's pricing rules fail validation at load time."""

    def __init__(self, field, message):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class RuleSetMismatch(PricingError):
    """Raised when a rule set of one service type is applied to another type's specification."""
    pass
