"""Patient and nutritionist records."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Nutritionist:
    """Practitioner that owns plans and dish templates."""

    id: UUID
    name: str


@dataclass(frozen=True)
class Patient:
    """Patient with an optional assigned nutritionist."""

    id: UUID
    name: str
    nutritionist_id: UUID | None
