"""Command surface exposed to the UI and drivers.

Every command takes the current state and returns a :class:`CommandResult`.
Invalid input never raises: the original state comes back untouched with a
diagnostic explaining why.
"""
from __future__ import annotations

import logging
import random
from dataclasses import replace

from config import (
    GUIDED_HEALTH_COST,
    TOTAL_SLOTS,
    YOLO_HEALTH_PENALTY,
    YOLO_REPUTATION_PENALTY,
)
from game.clock import advance_block, consume_block
from game.economy import purchase_item
from game.entities import ERROR, FAILED, RUNNING, CommandResult, GameState, JobState
from game.feed import resolve_feed_action
from game.jobs import clamp, create_job_state
from game.modifiers import compute_modifiers
from game.resolution import resolve_guided, resolve_quick

logger = logging.getLogger(__name__)

__all__ = [
    "act_on_feed_message",
    "advance_time",
    "assign_job_to_slot",
    "attempt_guided_resolution",
    "attempt_quick_resolution",
    "purchase_item",
    "set_block_progress",
]


def _replace_job(state: GameState, job: JobState) -> GameState:
    return replace(
        state,
        active_jobs=tuple(job if current.job_id == job.job_id else current for current in state.active_jobs),
    )


def _remove_job(state: GameState, job_id: str) -> GameState:
    return replace(state, active_jobs=tuple(job for job in state.active_jobs if job.job_id != job_id))


def advance_time(state: GameState, blocks: int, rng: random.Random) -> CommandResult:
    if blocks < 1:
        return CommandResult(state, f"Cannot advance time by {blocks} blocks")
    for _ in range(blocks):
        state = advance_block(state, rng)
    return CommandResult(state)


def assign_job_to_slot(state: GameState, job_id: str, slot_id: int) -> CommandResult:
    offer = next((offer for offer in state.available_job_offers if offer.key == job_id), None)
    if offer is None:
        if state.find_job(job_id) is not None:
            return CommandResult(state, f"Job {job_id} is already running")
        return CommandResult(state, f"Job {job_id} is not on offer")
    if not isinstance(slot_id, int) or isinstance(slot_id, bool):
        return CommandResult(state, f"GPU slot {slot_id!r} is not a slot number")
    if not 1 <= slot_id <= TOTAL_SLOTS:
        return CommandResult(state, f"GPU slot {slot_id} does not exist (1-{TOTAL_SLOTS})")
    occupant = state.job_in_slot(slot_id)
    if occupant is not None:
        return CommandResult(state, f"GPU slot {slot_id} is busy with {occupant.job_id}")
    if state.credits < offer.cost:
        return CommandResult(state, f"Insufficient credits to start {job_id}: need {offer.cost}, have {state.credits}")

    logger.info("Assigned job %s to GPU slot %d", job_id, slot_id)
    return CommandResult(
        replace(
            state,
            credits=state.credits - offer.cost,
            active_jobs=state.active_jobs + (create_job_state(offer, slot_id),),
            available_job_offers=tuple(o for o in state.available_job_offers if o.key != job_id),
        )
    )


def _errored_job(state: GameState, job_id: str) -> tuple[JobState | None, str | None]:
    job = state.find_job(job_id)
    if job is None:
        return None, f"Job {job_id} is not active"
    if job.status != ERROR:
        return None, f"Job {job_id} has no error to resolve"
    return job, None


def attempt_quick_resolution(state: GameState, job_id: str, rng: random.Random) -> CommandResult:
    job, problem = _errored_job(state, job_id)
    if job is None:
        return CommandResult(state, problem)

    resolved = resolve_quick(job, compute_modifiers(state), rng)
    if resolved.status != FAILED:
        return CommandResult(_replace_job(state, resolved))

    logger.info("Job %s lost to a failed YOLO fix", job_id)
    state = _remove_job(state, job_id)
    return CommandResult(
        replace(
            state,
            reputation=max(0, state.reputation - YOLO_REPUTATION_PENALTY),
            health=max(0, state.health - YOLO_HEALTH_PENALTY),
        )
    )


def attempt_guided_resolution(state: GameState, job_id: str, tool_id: str, rng: random.Random) -> CommandResult:
    job, problem = _errored_job(state, job_id)
    if job is None:
        return CommandResult(state, problem)
    prompt = state.catalog.prompt_by_id(tool_id)
    if prompt is None:
        return CommandResult(state, f"Unknown prompt {tool_id}")
    if tool_id not in state.owned_prompts:
        return CommandResult(state, f"Prompt {tool_id} is not owned")

    resolved = resolve_guided(job, prompt, rng)
    state = _replace_job(state, resolved)
    state = replace(state, health=max(0, state.health - GUIDED_HEALTH_COST))
    if resolved.status == RUNNING:
        state = consume_block(state, rng)
    return CommandResult(state)


def act_on_feed_message(state: GameState, message_id: str, action: str) -> CommandResult:
    return resolve_feed_action(state, message_id, action)


def set_block_progress(state: GameState, fraction: float) -> CommandResult:
    return CommandResult(replace(state, block_progress=clamp(fraction, 0.0, 1.0)))
