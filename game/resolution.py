"""Clearing an errored job: the YOLO gamble or a guided intervention."""
from __future__ import annotations

import logging
import random
from dataclasses import replace

from config import PROMPT_QUALITY_CEILING
from game.entities import ERROR, FAILED, RUNNING, JobState, Modifiers
from game.jobs import clamp
from prompt_catalog import PromptDefinition

logger = logging.getLogger(__name__)


def quick_success_rate(job: JobState, modifiers: Modifiers) -> float:
    return clamp(job.base_resolution_success_rate * modifiers.resolution_multiplier, 0.0, 1.0)


def guided_success_rate(prompt: PromptDefinition) -> float:
    # Independent of modifiers; tool quality alone decides.
    return clamp(prompt.quality / PROMPT_QUALITY_CEILING, 0.0, 1.0)


def _cleared(job: JobState) -> JobState:
    return replace(job, status=RUNNING, error_history=job.error_history[:-1])


def resolve_quick(job: JobState, modifiers: Modifiers, rng: random.Random) -> JobState:
    """Roll a YOLO fix.  Success resumes the job, failure kills it."""
    if job.status != ERROR:
        return job
    if rng.random() < quick_success_rate(job, modifiers):
        logger.debug("YOLO fix on %s succeeded", job.job_id)
        return _cleared(job)
    logger.debug("YOLO fix on %s failed", job.job_id)
    return replace(job, status=FAILED)


def resolve_guided(job: JobState, prompt: PromptDefinition, rng: random.Random) -> JobState:
    """Roll a guided intervention.  Failure leaves the job in error."""
    if job.status != ERROR:
        return job
    if rng.random() < guided_success_rate(prompt):
        logger.debug("Intervention on %s with %s succeeded", job.job_id, prompt.key)
        return _cleared(job)
    logger.debug("Intervention on %s with %s failed", job.job_id, prompt.key)
    return job
