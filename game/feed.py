"""Feed generation and player actions on feed messages.

A template reaches the feed only if it is off cooldown, its context allows it
and it wins an independent probability roll.  Each generation pass tries to
show one message of every type before doubling up on any.
"""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Dict, List

from config import (
    FEED_COOLDOWN_DAYS,
    FEED_MESSAGE_TYPES,
    HIGH_COMPLEXITY_DAY,
    HIGH_COMPLEXITY_LEVEL,
    HIGH_COMPLEXITY_PROBABILITY_BOOST,
    MAX_ARCHIVED_FEED_MESSAGES,
    MAX_FEED_MESSAGES,
    MESSAGES_PER_DAY,
)
from game.entities import CommandResult, FeedMessage, GameState
from game.jobs import clamp
from message_catalog import ACTION_ACCEPT_JOB, MessageTemplate

logger = logging.getLogger(__name__)

ACCEPT = "accept"
OPEN = "open"
DISMISS = "dismiss"
ARCHIVE = "archive"
FEED_ACTIONS = (ACCEPT, OPEN, DISMISS, ARCHIVE)


def is_cooling_down(state: GameState, template: MessageTemplate) -> bool:
    last_shown = state.last_shown_day(template.key)
    return last_shown is not None and state.day - last_shown < FEED_COOLDOWN_DAYS


def _owns(state: GameState, item_id: str) -> bool:
    return item_id in state.owned_hardware or item_id in state.owned_models or item_id in state.owned_prompts


def contextual_probability(state: GameState, template: MessageTemplate) -> float:
    """Template probability after context gates; 0.0 means the template is blocked."""
    if state.day < template.min_day:
        return 0.0
    if template.advertises and _owns(state, template.advertises):
        return 0.0

    probability = template.probability
    if template.action == ACTION_ACCEPT_JOB:
        job = state.catalog.job_by_id(template.job_id)
        if job is None:
            return 0.0
        if (
            job.key in state.completed_job_ids
            or state.find_job(job.key) is not None
            or state.is_offered(job.key)
        ):
            return 0.0
        if job.complexity >= HIGH_COMPLEXITY_LEVEL and state.day >= HIGH_COMPLEXITY_DAY:
            probability *= HIGH_COMPLEXITY_PROBABILITY_BOOST
    return clamp(probability, 0.0, 1.0)


def eligible_templates(state: GameState, rng: random.Random) -> List[MessageTemplate]:
    eligible: List[MessageTemplate] = []
    for template in state.catalog.messages:
        if is_cooling_down(state, template):
            continue
        probability = contextual_probability(state, template)
        if probability <= 0.0:
            continue
        if rng.random() < probability:
            eligible.append(template)
    return eligible


def _select(eligible: List[MessageTemplate], count: int, rng: random.Random) -> List[MessageTemplate]:
    by_type: Dict[str, List[MessageTemplate]] = {kind: [] for kind in FEED_MESSAGE_TYPES}
    for template in eligible:
        by_type.setdefault(template.type, []).append(template)

    kinds = [kind for kind, members in by_type.items() if members]
    rng.shuffle(kinds)
    picks = [rng.choice(by_type[kind]) for kind in kinds[:count]]

    leftovers = [template for template in eligible if template not in picks]
    picks.extend(rng.sample(leftovers, count - len(picks)))
    return picks


def generate_offers(state: GameState, rng: random.Random) -> GameState:
    eligible = eligible_templates(state, rng)
    capacity = MAX_FEED_MESSAGES - len(state.active_feed_messages)
    count = min(MESSAGES_PER_DAY, capacity, len(eligible))
    if count <= 0:
        return state

    serial = state.message_serial
    last_shown = dict(state.template_last_shown)
    fresh: List[FeedMessage] = []
    for template in _select(eligible, count, rng):
        serial += 1
        last_shown[template.key] = state.day
        fresh.append(
            FeedMessage(
                id=f"feed-{serial}",
                template_id=template.key,
                type=template.type,
                title=template.title,
                body=template.body,
                action=template.action,
                job_id=template.job_id or None,
                created_day=state.day,
                created_block=state.current_block,
            )
        )
        logger.debug("Feed message %s from template %s", fresh[-1].id, template.key)

    active = (tuple(fresh) + state.active_feed_messages)[:MAX_FEED_MESSAGES]
    return replace(
        state,
        active_feed_messages=active,
        template_last_shown=tuple(sorted(last_shown.items())),
        message_serial=serial,
    )


def _archive(state: GameState, message: FeedMessage) -> GameState:
    return replace(
        state,
        active_feed_messages=tuple(msg for msg in state.active_feed_messages if msg.id != message.id),
        archived_feed_messages=((message,) + state.archived_feed_messages)[:MAX_ARCHIVED_FEED_MESSAGES],
    )


def resolve_feed_action(state: GameState, message_id: str, action: str) -> CommandResult:
    message = state.find_message(message_id)
    if message is None:
        return CommandResult(state, f"Unknown feed message {message_id}")
    if action not in FEED_ACTIONS:
        return CommandResult(state, f"Unknown feed action {action!r}")

    if action != ACCEPT or message.action != ACTION_ACCEPT_JOB:
        return CommandResult(_archive(state, message))

    job_id = message.job_id or ""
    job = state.catalog.job_by_id(job_id)
    if job is None:
        return CommandResult(state, f"Job {job_id} is not in the catalog")
    if state.is_offered(job_id):
        return CommandResult(state, f"Job {job_id} is already on offer")
    if state.find_job(job_id) is not None:
        return CommandResult(state, f"Job {job_id} is already running")
    if job_id in state.completed_job_ids:
        return CommandResult(state, f"Job {job_id} was already completed")

    logger.info("Accepted job offer %s", job_id)
    return CommandResult(
        replace(
            state,
            active_feed_messages=tuple(msg for msg in state.active_feed_messages if msg.id != message.id),
            available_job_offers=state.available_job_offers + (job,),
        )
    )
