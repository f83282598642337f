"""Buying hardware, AI models and prompts with credits."""
from __future__ import annotations

import logging
from dataclasses import replace

from game.entities import CommandResult, GameState

logger = logging.getLogger(__name__)

HARDWARE = "hardware"
MODEL = "model"
PROMPT = "prompt"
ITEM_TYPES = (HARDWARE, MODEL, PROMPT)

_OWNED_FIELD = {
    HARDWARE: "owned_hardware",
    MODEL: "owned_models",
    PROMPT: "owned_prompts",
}


def purchase_item(state: GameState, item_id: str, item_type: str) -> CommandResult:
    if item_type == HARDWARE:
        item = state.catalog.hardware_by_id(item_id)
    elif item_type == MODEL:
        item = state.catalog.model_by_id(item_id)
    elif item_type == PROMPT:
        item = state.catalog.prompt_by_id(item_id)
    else:
        return CommandResult(state, f"Unknown item type {item_type!r}")

    if item is None:
        return CommandResult(state, f"Unknown {item_type} {item_id}")

    owned_field = _OWNED_FIELD[item_type]
    owned = getattr(state, owned_field)
    if item_id in owned:
        return CommandResult(state, f"Already own {item_type} {item_id}")
    if state.credits < item.cost:
        return CommandResult(state, f"Insufficient credits for {item_id}: need {item.cost}, have {state.credits}")

    logger.info("Purchased %s %s for %d credits", item_type, item_id, item.cost)
    return CommandResult(
        replace(state, credits=state.credits - item.cost, **{owned_field: owned + (item_id,)})
    )
