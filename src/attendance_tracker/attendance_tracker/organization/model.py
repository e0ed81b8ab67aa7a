from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from ..core.constants import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_DEPARTMENTS,
    DEFAULT_ORG_NAME,
    DEFAULT_POSITIONS,
)


@dataclass(frozen=True)
class OrganizationSettings:
    """Singleton settings; departments/positions are the vocabulary offered to employee forms."""

    name: str
    departments: tuple[str, ...] = field(default_factory=tuple)
    positions: tuple[str, ...] = field(default_factory=tuple)
    accent_color: Optional[str] = None

    def with_departments(self, departments) -> "OrganizationSettings":
        return replace(self, departments=tuple(departments))

    def with_positions(self, positions) -> "OrganizationSettings":
        return replace(self, positions=tuple(positions))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "departments": list(self.departments),
            "positions": list(self.positions),
        }
        if self.accent_color is not None:
            data["accentColor"] = self.accent_color
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrganizationSettings":
        accent = data.get("accentColor")
        return cls(
            name=str(data.get("name", "")),
            departments=tuple(str(d) for d in data.get("departments") or ()),
            positions=tuple(str(p) for p in data.get("positions") or ()),
            accent_color=None if accent is None else str(accent),
        )


def default_settings() -> OrganizationSettings:
    return OrganizationSettings(
        name=DEFAULT_ORG_NAME,
        departments=DEFAULT_DEPARTMENTS,
        positions=DEFAULT_POSITIONS,
        accent_color=DEFAULT_ACCENT_COLOR,
    )
