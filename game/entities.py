"""Core dataclasses for the Vibe Coding Simulator.

Every type here is frozen.  Operations build the next value with
``dataclasses.replace`` instead of mutating the previous one.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from catalog_store import Catalog
from config import (
    STARTING_CREDITS,
    STARTING_HEALTH,
    STARTING_REPUTATION,
    TIME_BLOCKS_PER_DAY,
)
from job_catalog import JobDefinition

RUNNING = "running"
ERROR = "error"
COMPLETED = "completed"
FAILED = "failed"
JOB_STATUSES = (RUNNING, ERROR, COMPLETED, FAILED)


@dataclass(frozen=True)
class ErrorRecord:
    threshold: float


@dataclass(frozen=True)
class JobState:
    """A job running on a GPU slot.

    The rates, duration and rewards are copied from the catalog when the job
    is assigned so later catalog changes never reach an in-flight job.
    """

    job_id: str
    assigned_slot: int
    baseline_duration: float
    base_error_rate: float
    base_resolution_success_rate: float
    reward: int = 0
    reputation_reward: int = 0
    progress: float = 0.0
    error_history: Tuple[ErrorRecord, ...] = ()
    status: str = RUNNING


@dataclass(frozen=True)
class FeedMessage:
    id: str
    template_id: str
    type: str
    title: str
    body: str
    action: Optional[str] = None
    job_id: Optional[str] = None
    created_day: int = 1
    created_block: int = 0


@dataclass(frozen=True)
class Modifiers:
    speed_multiplier: float = 1.0
    error_multiplier: float = 1.0
    resolution_multiplier: float = 1.0


@dataclass(frozen=True)
class GameState:
    catalog: Catalog = field(default_factory=Catalog, repr=False)
    day: int = 1
    time_blocks_remaining: int = TIME_BLOCKS_PER_DAY
    credits: int = STARTING_CREDITS
    reputation: int = STARTING_REPUTATION
    health: int = STARTING_HEALTH
    block_progress: float = 0.0
    elapsed_blocks: int = 0
    owned_hardware: Tuple[str, ...] = ()
    owned_models: Tuple[str, ...] = ()
    owned_prompts: Tuple[str, ...] = ()
    active_jobs: Tuple[JobState, ...] = ()
    completed_job_ids: FrozenSet[str] = frozenset()
    available_job_offers: Tuple[JobDefinition, ...] = ()
    active_feed_messages: Tuple[FeedMessage, ...] = ()
    archived_feed_messages: Tuple[FeedMessage, ...] = ()
    # Sorted (template id, day last instantiated) pairs.
    template_last_shown: Tuple[Tuple[str, int], ...] = ()
    message_serial: int = 0

    @property
    def current_block(self) -> int:
        """Blocks already spent today."""
        return TIME_BLOCKS_PER_DAY - self.time_blocks_remaining

    def last_shown_day(self, template_id: str) -> Optional[int]:
        return dict(self.template_last_shown).get(template_id)

    def find_job(self, job_id: str) -> Optional[JobState]:
        return next((job for job in self.active_jobs if job.job_id == job_id), None)

    def job_in_slot(self, slot: int) -> Optional[JobState]:
        return next((job for job in self.active_jobs if job.assigned_slot == slot), None)

    def find_message(self, message_id: str) -> Optional[FeedMessage]:
        return next((msg for msg in self.active_feed_messages if msg.id == message_id), None)

    def is_offered(self, job_id: str) -> bool:
        return any(offer.key == job_id for offer in self.available_job_offers)

    def to_dict(self) -> Dict:
        """JSON-compatible projection of everything except the catalog."""
        return {
            "day": self.day,
            "time_blocks_remaining": self.time_blocks_remaining,
            "credits": self.credits,
            "reputation": self.reputation,
            "health": self.health,
            "block_progress": self.block_progress,
            "elapsed_blocks": self.elapsed_blocks,
            "owned_hardware": list(self.owned_hardware),
            "owned_models": list(self.owned_models),
            "owned_prompts": list(self.owned_prompts),
            "active_jobs": [asdict(job) for job in self.active_jobs],
            "completed_job_ids": sorted(self.completed_job_ids),
            "available_job_offers": [offer.key for offer in self.available_job_offers],
            "active_feed_messages": [asdict(msg) for msg in self.active_feed_messages],
            "archived_feed_messages": [asdict(msg) for msg in self.archived_feed_messages],
            "template_last_shown": dict(self.template_last_shown),
        }


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a command: the next state, plus a diagnostic when the input was rejected."""

    state: GameState
    diagnostic: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None
