"""Tests for YOLO and guided error resolution."""
from __future__ import annotations

import random

import pytest

from config import GUIDED_HEALTH_COST, TIME_BLOCKS_PER_DAY, YOLO_HEALTH_PENALTY, YOLO_REPUTATION_PENALTY
from game.commands import attempt_guided_resolution, attempt_quick_resolution
from game.entities import ERROR, FAILED, RUNNING, ErrorRecord, Modifiers
from game.resolution import guided_success_rate, quick_success_rate, resolve_guided, resolve_quick


@pytest.fixture
def errored(make_job):
    return make_job(
        status=ERROR,
        progress=0.5,
        error_history=(ErrorRecord(0.25), ErrorRecord(0.5)),
        base_resolution_success_rate=0.5,
    )


def test_quick_success_pops_latest_error(errored, scripted):
    job = resolve_quick(errored, Modifiers(), scripted([0.1]))

    assert job.status == RUNNING
    assert job.error_history == (ErrorRecord(0.25),)
    assert job.progress == 0.5


def test_quick_failure_marks_job_failed(errored, scripted):
    job = resolve_quick(errored, Modifiers(), scripted([0.9]))
    assert job.status == FAILED


def test_quick_rate_uses_resolution_multiplier(errored):
    assert quick_success_rate(errored, Modifiers(resolution_multiplier=1.5)) == pytest.approx(0.75)
    assert quick_success_rate(errored, Modifiers(resolution_multiplier=5.0)) == 1.0


def test_resolving_a_running_job_is_a_no_op(make_job, scripted):
    job = make_job()
    assert resolve_quick(job, Modifiers(), scripted([0.0])) is job


def test_guided_rate_ignores_modifiers(catalog):
    assert guided_success_rate(catalog.prompt_by_id("pr_mid")) == pytest.approx(0.5)
    assert guided_success_rate(catalog.prompt_by_id("pr_max")) == 1.0
    assert guided_success_rate(catalog.prompt_by_id("pr_zero")) == 0.0


def test_guided_failure_keeps_error(errored, catalog, scripted):
    job = resolve_guided(errored, catalog.prompt_by_id("pr_mid"), scripted([0.6]))

    assert job.status == ERROR
    assert job.error_history == errored.error_history


def test_zero_success_yolo_always_fails_and_removes_job(make_state, make_job):
    rng = random.Random(0)
    for _ in range(25):
        job = make_job(status=ERROR, error_history=(ErrorRecord(0.25),), base_resolution_success_rate=0.0)
        state = make_state(active_jobs=(job,), reputation=3, health=50)

        result = attempt_quick_resolution(state, job.job_id, rng)

        assert result.ok
        assert result.state.active_jobs == ()
        assert result.state.reputation == max(0, 3 - YOLO_REPUTATION_PENALTY)
        assert result.state.health == 50 - YOLO_HEALTH_PENALTY


def test_quick_resolution_rejects_job_without_error(make_state, make_job):
    state = make_state(active_jobs=(make_job(),))

    result = attempt_quick_resolution(state, "job_easy", random.Random(0))

    assert not result.ok
    assert result.state is state


def test_quick_resolution_rejects_unknown_job(make_state):
    state = make_state()
    result = attempt_quick_resolution(state, "job_nope", random.Random(0))
    assert result.state is state
    assert "not active" in result.diagnostic


def test_guided_success_consumes_a_block_and_health(make_state, errored):
    state = make_state(active_jobs=(errored,), owned_prompts=("pr_max",), health=40)

    result = attempt_guided_resolution(state, errored.job_id, "pr_max", random.Random(0))

    job = result.state.find_job(errored.job_id)
    assert job.status == RUNNING
    assert job.error_history == (ErrorRecord(0.25),)
    assert result.state.time_blocks_remaining == TIME_BLOCKS_PER_DAY - 1
    assert result.state.health == 40 - GUIDED_HEALTH_COST


def test_guided_failure_costs_health_but_no_block(make_state, errored):
    state = make_state(active_jobs=(errored,), owned_prompts=("pr_zero",), health=40)

    result = attempt_guided_resolution(state, errored.job_id, "pr_zero", random.Random(0))

    assert result.ok
    assert result.state.find_job(errored.job_id).status == ERROR
    assert result.state.time_blocks_remaining == TIME_BLOCKS_PER_DAY
    assert result.state.health == 40 - GUIDED_HEALTH_COST


@pytest.mark.parametrize("tool_id", ["pr_max", "pr_missing"])
def test_guided_rejects_unowned_or_unknown_tool(make_state, errored, tool_id):
    state = make_state(active_jobs=(errored,), owned_prompts=("pr_mid",), health=40)

    result = attempt_guided_resolution(state, errored.job_id, tool_id, random.Random(0))

    assert not result.ok
    assert result.state is state


def test_guided_success_on_last_block_rolls_the_day(make_state, errored):
    state = make_state(active_jobs=(errored,), owned_prompts=("pr_max",), time_blocks_remaining=1)

    result = attempt_guided_resolution(state, errored.job_id, "pr_max", random.Random(0))

    assert result.state.day == 2
    assert result.state.time_blocks_remaining == TIME_BLOCKS_PER_DAY
