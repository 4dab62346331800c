"""
Domain Entities - The ticket record shared by the store and the tracker.
"""

from dataclasses import dataclass, replace


DEFAULT_TYPE = "Task"
DEFAULT_PRIORITY = "Medium"

# Fields that decide whether a stored ticket is out of date. URL is not one of them.
COMPARABLE_FIELDS = ("summary", "status", "type", "priority")


@dataclass
class Ticket:
    """
    A work ticket as kept in the local store.

    The key (e.g. PROJ-123) identifies the ticket for its whole life;
    every other field may be overwritten by a sync or a manual edit.
    """

    key: str
    summary: str
    status: str = ""
    url: str = ""
    type: str = DEFAULT_TYPE
    priority: str = DEFAULT_PRIORITY

    def __post_init__(self):
        if not self.type:
            self.type = DEFAULT_TYPE
        if not self.priority:
            self.priority = DEFAULT_PRIORITY

    @property
    def has_link(self) -> bool:
        """Check if the ticket links back to the tracker."""
        return bool(self.url)

    def differs_from(self, other: "Ticket") -> bool:
        """Check if any comparable field differs (exact string comparison)."""
        return any(
            getattr(self, name) != getattr(other, name)
            for name in COMPARABLE_FIELDS
        )

    def changed_fields(self, other: "Ticket") -> list[str]:
        """Names of comparable fields whose values differ from other."""
        return [
            name for name in COMPARABLE_FIELDS
            if getattr(self, name) != getattr(other, name)
        ]

    def copy(self, **changes) -> "Ticket":
        """Return a copy with the given fields replaced."""
        if "key" in changes and changes["key"] != self.key:
            raise ValueError(f"Ticket key cannot change ({self.key})")
        return replace(self, **changes)

    def __str__(self) -> str:
        return f"{self.key}: {self.summary}"
