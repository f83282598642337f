"""Time blocks, day rollover and the per-block job update."""
from __future__ import annotations

import logging
import math
import random
from dataclasses import replace

from config import DAILY_HEALTH_DECAY, HARDWARE_DAILY_UPKEEP, TIME_BLOCKS_PER_DAY
from game.entities import RUNNING, GameState
from game.feed import generate_offers
from game.jobs import settle_finished_jobs, tick_job
from game.modifiers import compute_modifiers

logger = logging.getLogger(__name__)


def daily_upkeep(state: GameState) -> int:
    total = 0
    for key in state.owned_hardware:
        hardware = state.catalog.hardware_by_id(key)
        if hardware is not None:
            total += math.ceil(HARDWARE_DAILY_UPKEEP * (1.0 - hardware.energy_efficiency))
    return total


def roll_day(state: GameState, rng: random.Random) -> GameState:
    upkeep = daily_upkeep(state)
    state = replace(
        state,
        day=state.day + 1,
        time_blocks_remaining=TIME_BLOCKS_PER_DAY,
        health=max(0, state.health - DAILY_HEALTH_DECAY),
        credits=max(0, state.credits - upkeep),
    )
    logger.info("Day %d begins (health %d, upkeep %d credits)", state.day, state.health, upkeep)
    return generate_offers(state, rng)


def consume_block(state: GameState, rng: random.Random) -> GameState:
    """Spend one block without advancing jobs, rolling the day when it runs out."""
    state = replace(
        state,
        time_blocks_remaining=state.time_blocks_remaining - 1,
        elapsed_blocks=state.elapsed_blocks + 1,
        block_progress=0.0,
    )
    if state.time_blocks_remaining <= 0:
        state = roll_day(state, rng)
    return state


def advance_block(state: GameState, rng: random.Random) -> GameState:
    state = consume_block(state, rng)

    modifiers = compute_modifiers(state)
    jobs = tuple(
        tick_job(job, 1, modifiers, rng) if job.status == RUNNING else job
        for job in state.active_jobs
    )
    return settle_finished_jobs(replace(state, active_jobs=jobs))
