"""Tests for the soil mix builder."""

import pytest

from rosarium.core.soil import SoilComponent, SoilMix, transplant_details


def test_default_mix_is_complete() -> None:
    """A fresh mix is 100% of the first soil type."""
    mix = SoilMix()

    assert mix.is_complete
    assert mix.components[0].type == "PREMIUM_ROSE"


def test_add_takes_remaining_share() -> None:
    """A new component gets whatever is not yet assigned."""
    mix = SoilMix([SoilComponent("AKADAMA", 70)])

    mix.add("COMPOST")

    assert mix.components[1].percent == 30
    assert mix.is_complete


def test_two_components_balance_each_other() -> None:
    """With exactly two components, editing one adjusts the other."""
    mix = SoilMix([SoilComponent("AKADAMA", 50), SoilComponent("COMPOST", 50)])

    mix.set_percent(0, 80)

    assert [c.percent for c in mix.components] == [80, 20]


def test_three_components_do_not_balance() -> None:
    """Three or more components are adjusted by hand."""
    mix = SoilMix([SoilComponent("AKADAMA", 50), SoilComponent("COMPOST", 30)])
    mix.add("PEAT")

    mix.set_percent(0, 60)

    assert mix.total == 110
    assert not mix.is_complete


def test_remove_keeps_last_component() -> None:
    """A mix never becomes empty."""
    mix = SoilMix()

    mix.remove(0)

    assert len(mix.components) == 1


def test_parse_specs_with_custom_soil() -> None:
    """OTHER components carry a custom name."""
    mix = SoilMix.parse(["akadama:60", "OTHER=Pumice:40"])

    assert mix.is_complete
    assert mix.describe() == "赤玉土 (60%) + Pumice (40%)"


@pytest.mark.parametrize("spec", ["AKADAMA", "AKADAMA:lots", "DIRT:100"])
def test_parse_rejects_bad_specs(spec: str) -> None:
    """Malformed or unknown components are errors."""
    with pytest.raises(ValueError):
        SoilMix.parse([spec])


def test_transplant_details_without_pot() -> None:
    """The pot size bracket is only shown when given."""
    details = transplant_details("GROUND", SoilMix())

    assert details == "地植え (Planting in Ground) | Soil: プレミアムローズ培養土 (100%)"
