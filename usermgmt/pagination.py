"""Paging and sorting parameters for list queries."""

from dataclasses import dataclass, field
from enum import Enum

from usermgmt.errors import ValidationFailedError

SORTABLE_FIELDS = ("created_at", "updated_at", "username", "email")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    field: str = "created_at"
    direction: SortDirection = SortDirection.DESC

    @classmethod
    def parse(cls, raw: str | None) -> "SortSpec":
        """Parse `field[,direction]`, e.g. `username,asc`.

        An empty value yields the default (created_at, desc).
        """
        if raw is None or not raw.strip():
            return cls()

        field_name, _, direction = (part.strip() for part in raw.partition(","))
        field_name = field_name.lower()
        if field_name not in SORTABLE_FIELDS:
            raise ValidationFailedError(
                "Validation failed",
                {"sort": f"Unsupported sort field '{field_name}'; expected one of {', '.join(SORTABLE_FIELDS)}"},
            )

        if not direction:
            return cls(field=field_name)
        try:
            return cls(field=field_name, direction=SortDirection(direction.lower()))
        except ValueError as exc:
            raise ValidationFailedError(
                "Validation failed",
                {"sort": f"Unsupported sort direction '{direction}'; expected asc or desc"},
            ) from exc


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page request."""

    page: int = 0
    size: int = 20
    sort: SortSpec = field(default_factory=SortSpec)

    @property
    def offset(self) -> int:
        return self.page * self.size
