"""Domain exceptions surfaced to callers."""


class DomainError(Exception):
    """Base error carrying a machine-readable kind and a message."""

    default_kind = "domain_error"

    def __init__(self, message: str, kind: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind or self.default_kind
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}


class NotFoundError(DomainError):
    """A referenced patient, nutritionist, plan, food item or dish is missing."""

    default_kind = "not_found"


class BusinessRuleViolation(DomainError):
    """A plan change breaks a business rule and was rejected before writing."""

    default_kind = "business_rule_violation"
