"""Job lifecycle: progress, error-threshold checks, completion and payout."""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import List

from config import ERROR_THRESHOLDS, PROGRESS_EPSILON
from game.entities import COMPLETED, ERROR, RUNNING, ErrorRecord, GameState, JobState, Modifiers
from job_catalog import JobDefinition

logger = logging.getLogger(__name__)


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def create_job_state(definition: JobDefinition, slot: int) -> JobState:
    return JobState(
        job_id=definition.key,
        assigned_slot=slot,
        baseline_duration=definition.baseline_duration,
        base_error_rate=definition.error_rate,
        base_resolution_success_rate=definition.yolo_success,
        reward=definition.reward,
        reputation_reward=definition.reputation_reward,
    )


def roll_error(job: JobState, modifiers: Modifiers, rng: random.Random) -> bool:
    rate = clamp(job.base_error_rate * modifiers.error_multiplier, 0.0, 1.0)
    return rng.random() < rate


def tick_job(job: JobState, blocks_elapsed: float, modifiers: Modifiers, rng: random.Random) -> JobState:
    """Advance a running job by ``blocks_elapsed`` blocks.

    At most one error is raised per call: thresholds are checked in ascending
    order and the first failed roll halts the job.  Jobs that are not running
    come back unchanged, so an errored job stays frozen until resolved.
    """
    if job.status != RUNNING:
        return job

    increment = (blocks_elapsed / job.baseline_duration) * modifiers.speed_multiplier
    previous = job.progress
    progress = clamp(previous + increment, 0.0, 1.0)
    if progress > 1.0 - PROGRESS_EPSILON:
        progress = 1.0

    seen = {record.threshold for record in job.error_history}
    for threshold in ERROR_THRESHOLDS:
        if threshold in seen:
            continue
        if not (previous + PROGRESS_EPSILON < threshold <= progress + PROGRESS_EPSILON):
            continue
        if roll_error(job, modifiers, rng):
            logger.debug("Job %s hit an error at %d%%", job.job_id, round(threshold * 100))
            return replace(
                job,
                progress=progress,
                status=ERROR,
                error_history=job.error_history + (ErrorRecord(threshold),),
            )
        logger.debug("Job %s passed error check at %d%%", job.job_id, round(threshold * 100))

    if progress >= 1.0:
        logger.debug("Job %s finished", job.job_id)
        return replace(job, progress=progress, status=COMPLETED)
    return replace(job, progress=progress)


def settle_finished_jobs(state: GameState) -> GameState:
    """Pay out completed jobs and drop them from the active list."""
    remaining: List[JobState] = []
    credits = state.credits
    reputation = state.reputation
    completed = set(state.completed_job_ids)
    for job in state.active_jobs:
        if job.status != COMPLETED:
            remaining.append(job)
            continue
        credits += job.reward
        reputation += job.reputation_reward
        completed.add(job.job_id)
        logger.info("Job %s completed on slot %d (+%d credits, +%d rep)", job.job_id, job.assigned_slot, job.reward, job.reputation_reward)

    if len(remaining) == len(state.active_jobs):
        return state
    return replace(
        state,
        active_jobs=tuple(remaining),
        credits=credits,
        reputation=reputation,
        completed_job_ids=frozenset(completed),
    )
