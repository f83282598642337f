"""Derives job multipliers from the player's owned equipment.

Only the strongest owned rig (by processing power) and the most accurate
owned model count.  Ties go to whichever was bought first.
"""
from __future__ import annotations

from typing import Callable, Iterable, Optional, TypeVar

from config import (
    ERROR_MULTIPLIER_FLOOR,
    ERROR_REDUCTION_PER_ACCURACY,
    ERROR_REDUCTION_PER_MEMORY,
    RESOLUTION_PER_ACCURACY,
    SPEED_PER_INFERENCE_SPEED,
    SPEED_PER_PROCESSING_POWER,
)
from game.entities import GameState, Modifiers
from hardware_catalog import HardwareDefinition
from model_catalog import AiModelDefinition

T = TypeVar("T")


def _best_owned(
    owned: Iterable[str],
    lookup: Callable[[str], Optional[T]],
    score: Callable[[T], float],
) -> Optional[T]:
    best: Optional[T] = None
    for key in owned:
        record = lookup(key)
        if record is None:
            continue
        # Strict comparison keeps the earliest purchase on ties.
        if best is None or score(record) > score(best):
            best = record
    return best


def active_hardware(state: GameState) -> Optional[HardwareDefinition]:
    return _best_owned(state.owned_hardware, state.catalog.hardware_by_id, lambda hw: hw.processing_power)


def active_model(state: GameState) -> Optional[AiModelDefinition]:
    return _best_owned(state.owned_models, state.catalog.model_by_id, lambda model: model.accuracy)


def compute_modifiers(state: GameState) -> Modifiers:
    speed = 1.0
    error = 1.0
    resolution = 1.0

    hardware = active_hardware(state)
    if hardware is not None:
        speed *= 1.0 + hardware.processing_power * SPEED_PER_PROCESSING_POWER
        error *= 1.0 - hardware.memory * ERROR_REDUCTION_PER_MEMORY

    model = active_model(state)
    if model is not None:
        speed *= 1.0 + model.inference_speed * SPEED_PER_INFERENCE_SPEED
        error *= 1.0 - model.accuracy * ERROR_REDUCTION_PER_ACCURACY
        resolution *= 1.0 + model.accuracy * RESOLUTION_PER_ACCURACY

    return Modifiers(
        speed_multiplier=speed,
        error_multiplier=max(ERROR_MULTIPLIER_FLOOR, error),
        resolution_multiplier=resolution,
    )
