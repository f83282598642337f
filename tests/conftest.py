from __future__ import annotations

import random
from dataclasses import replace

import pytest

from catalog_store import Catalog
from game.entities import GameState, JobState
from hardware_catalog import HardwareDefinition
from job_catalog import JobDefinition
from message_catalog import MessageTemplate
from model_catalog import AiModelDefinition
from prompt_catalog import PromptDefinition


class ScriptedRandom(random.Random):
    """``random()`` hands out queued values first, then the seeded stream."""

    def __init__(self, values=(), seed: int = 0) -> None:
        super().__init__(seed)
        self.values = list(values)

    def random(self) -> float:
        if self.values:
            return self.values.pop(0)
        return super().random()

    # Keep choice/shuffle/sample on getrandbits so they never eat scripted values.
    def getrandbits(self, k: int) -> int:
        return super().getrandbits(k)


TEST_CATALOG = Catalog(
    hardware=(
        HardwareDefinition("hw_basic", "Basic GPU", processing_power=0.2, memory=0.2, energy_efficiency=0.5, cost=0),
        HardwareDefinition("hw_pro", "Pro GPU", processing_power=0.6, memory=0.6, energy_efficiency=0.8, cost=500),
        HardwareDefinition("hw_twin", "Pro GPU twin", processing_power=0.6, memory=0.1, energy_efficiency=0.8, cost=500),
        HardwareDefinition("hw_top", "Top GPU", processing_power=1.0, memory=1.0, energy_efficiency=1.0, cost=5000),
    ),
    ai_models=(
        AiModelDefinition("ai_small", "Small", accuracy=0.3, inference_speed=0.5, cost=100),
        AiModelDefinition("ai_big", "Big", accuracy=0.9, inference_speed=0.6, cost=2000),
    ),
    prompts=(
        PromptDefinition("pr_zero", "Useless", clarity=0.0, specificity=0.0, adaptability=0.0, cost=0),
        PromptDefinition("pr_mid", "Okay", clarity=6.0, specificity=3.0, adaptability=6.0, cost=50),
        PromptDefinition("pr_max", "Perfect", clarity=10.0, specificity=10.0, adaptability=10.0, cost=300),
    ),
    jobs=(
        JobDefinition("job_easy", "Easy", complexity=1, baseline_duration=4, error_rate=0.0, yolo_success=1.0, reward=100, reputation_reward=5),
        JobDefinition("job_risky", "Risky", complexity=2, baseline_duration=4, error_rate=1.0, yolo_success=0.0, reward=300, reputation_reward=10),
        JobDefinition("job_paid", "Paid", complexity=3, baseline_duration=8, error_rate=0.0, yolo_success=1.0, reward=500, cost=200),
        JobDefinition("job_epic", "Epic", complexity=5, baseline_duration=20, error_rate=0.5, yolo_success=0.5, reward=3000, reputation_reward=40),
    ),
    messages=(
        MessageTemplate("t_social", type="Social", title="Hype", probability=1.0, action="Open"),
        MessageTemplate("t_direct_easy", type="Direct", title="Easy gig", probability=1.0, action="AcceptJob", job_id="job_easy"),
        MessageTemplate("t_direct_epic", type="Direct", title="Epic gig", probability=0.5, action="AcceptJob", job_id="job_epic"),
        MessageTemplate("t_system_ad", type="System", title="Top GPU sale", probability=1.0, action="Open", advertises="hw_top"),
    ),
)


@pytest.fixture
def catalog() -> Catalog:
    return TEST_CATALOG


@pytest.fixture
def make_state():
    def _make(**overrides) -> GameState:
        overrides.setdefault("catalog", TEST_CATALOG)
        return GameState(**overrides)

    return _make


@pytest.fixture
def make_job():
    def _make(**overrides) -> JobState:
        base = JobState(
            job_id="job_easy",
            assigned_slot=1,
            baseline_duration=4,
            base_error_rate=0.0,
            base_resolution_success_rate=1.0,
        )
        return replace(base, **overrides)

    return _make


@pytest.fixture
def scripted():
    return ScriptedRandom
