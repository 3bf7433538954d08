"""Soil mix composition for transplant records."""

from dataclasses import dataclass, field

from rosarium.catalog import SOIL_TYPES, TRANSPLANT_TYPES, label_for, short_label


@dataclass
class SoilComponent:
    type: str
    percent: int
    custom_name: str | None = None

    def label(self) -> str:
        if self.type == "OTHER":
            return self.custom_name or "Other"
        return short_label(label_for(SOIL_TYPES, self.type) or self.type)


def _default_components() -> list[SoilComponent]:
    return [SoilComponent(SOIL_TYPES[0].value, 100)]


@dataclass
class SoilMix:
    """Editable list of soil components that should add up to 100%."""

    components: list[SoilComponent] = field(default_factory=_default_components)

    @property
    def total(self) -> int:
        return sum(c.percent for c in self.components)

    @property
    def is_complete(self) -> bool:
        return self.total == 100

    def add(self, soil_type: str = SOIL_TYPES[0].value, custom_name: str | None = None) -> None:
        """Append a component that takes whatever percentage is still unassigned."""
        remaining = max(0, 100 - self.total)
        self.components.append(SoilComponent(soil_type, remaining, custom_name))

    def remove(self, index: int) -> None:
        # A mix always keeps at least one component.
        if len(self.components) > 1:
            del self.components[index]

    def set_percent(self, index: int, percent: int) -> None:
        """Set one component's share.

        With exactly two components the other one is rebalanced so the total
        stays at 100. With three or more the user adjusts by hand.
        """
        self.components[index].percent = percent
        if len(self.components) == 2 and 0 <= percent <= 100:
            self.components[1 - index].percent = 100 - percent

    def describe(self) -> str:
        return " + ".join(f"{c.label()} ({c.percent}%)" for c in self.components)

    @classmethod
    def parse(cls, specs: list[str]) -> "SoilMix":
        """Build a mix from ``TYPE:PERCENT`` strings (``OTHER=name:PERCENT`` for custom soil).

        Raises:
            ValueError: A component is malformed or names an unknown soil type.
        """
        if not specs:
            return cls()
        components: list[SoilComponent] = []
        for spec in specs:
            head, sep, percent_str = spec.rpartition(":")
            if not sep or not percent_str.strip().isdigit():
                msg = f"Bad soil component {spec!r}, expected TYPE:PERCENT"
                raise ValueError(msg)
            soil_type, _, custom = head.partition("=")
            soil_type = soil_type.strip().upper()
            if label_for(SOIL_TYPES, soil_type) is None:
                msg = f"Unknown soil type {soil_type!r}"
                raise ValueError(msg)
            components.append(
                SoilComponent(soil_type, int(percent_str), custom.strip() or None)
            )
        return cls(components)


def transplant_details(kind: str, mix: SoilMix, pot_size: str = "") -> str:
    """Details line for a transplant event, e.g. ``"鉢増し (Pot Up) [8 -> 10] | Soil: ..."``."""
    type_label = label_for(TRANSPLANT_TYPES, kind) or kind
    pot = f" [{pot_size}]" if pot_size else ""
    return f"{type_label}{pot} | Soil: {mix.describe()}"
