"""Tests for the equipment-derived multipliers."""
from __future__ import annotations

import pytest

from catalog_store import Catalog
from config import (
    ERROR_MULTIPLIER_FLOOR,
    ERROR_REDUCTION_PER_MEMORY,
    SPEED_PER_PROCESSING_POWER,
)
from game.entities import GameState, Modifiers
from game.modifiers import active_hardware, active_model, compute_modifiers
from hardware_catalog import HardwareDefinition
from model_catalog import AiModelDefinition


def test_no_equipment_is_neutral(make_state):
    assert compute_modifiers(make_state()) == Modifiers(1.0, 1.0, 1.0)


def test_unknown_owned_ids_are_ignored(make_state):
    state = make_state(owned_hardware=("hw_ghost",), owned_models=("ai_ghost",))
    assert compute_modifiers(state) == Modifiers()


def test_hardware_formula(make_state):
    mods = compute_modifiers(make_state(owned_hardware=("hw_pro",)))

    assert mods.speed_multiplier == pytest.approx(1.0 + 0.6 * SPEED_PER_PROCESSING_POWER)
    assert mods.error_multiplier == pytest.approx(1.0 - 0.6 * ERROR_REDUCTION_PER_MEMORY)
    assert mods.resolution_multiplier == 1.0


def test_strongest_hardware_is_active(make_state):
    state = make_state(owned_hardware=("hw_basic", "hw_top", "hw_pro"))
    assert active_hardware(state).key == "hw_top"


def test_hardware_tie_goes_to_first_purchase(make_state):
    assert active_hardware(make_state(owned_hardware=("hw_twin", "hw_pro"))).key == "hw_twin"
    assert active_hardware(make_state(owned_hardware=("hw_pro", "hw_twin"))).key == "hw_pro"


def test_most_accurate_model_is_active(make_state):
    state = make_state(owned_models=("ai_small", "ai_big"))
    assert active_model(state).key == "ai_big"


def test_model_improves_resolution_odds(make_state):
    small = compute_modifiers(make_state(owned_models=("ai_small",)))
    big = compute_modifiers(make_state(owned_models=("ai_small", "ai_big")))

    assert small.resolution_multiplier > 1.0
    assert big.resolution_multiplier > small.resolution_multiplier


def test_compute_modifiers_is_deterministic(make_state):
    state = make_state(owned_hardware=("hw_pro",), owned_models=("ai_big",))
    assert compute_modifiers(state) == compute_modifiers(state)


@pytest.mark.parametrize(
    "worse, better",
    [
        ((), ("hw_basic",)),
        (("hw_basic",), ("hw_basic", "hw_pro")),
        (("hw_pro",), ("hw_pro", "hw_top")),
    ],
)
def test_better_hardware_never_hurts(make_state, worse, better):
    before = compute_modifiers(make_state(owned_hardware=worse, owned_models=("ai_small",)))
    after = compute_modifiers(make_state(owned_hardware=better, owned_models=("ai_small",)))

    assert after.speed_multiplier >= before.speed_multiplier
    assert after.error_multiplier <= before.error_multiplier


def test_error_multiplier_never_drops_below_floor():
    catalog = Catalog(
        hardware=(HardwareDefinition("hw_max", "Max", processing_power=1.0, memory=1.0),),
        ai_models=(AiModelDefinition("ai_max", "Max", accuracy=1.0, inference_speed=1.0),),
    )
    state = GameState(catalog=catalog, owned_hardware=("hw_max",), owned_models=("ai_max",))

    assert compute_modifiers(state).error_multiplier >= ERROR_MULTIPLIER_FLOOR > 0.0
