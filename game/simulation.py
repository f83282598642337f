"""GameSession: the single writer of the game state.

All gameplay constants are imported from ``config``.  The session has no
pygame dependency and is safe to import in headless / test contexts.

Commands are pure functions from ``game.commands``; the session only
serialises them, keeps the random source, and records history.  A tick that
arrives while another command is running waits on the lock, so two commands
never interleave and none are dropped.
"""
from __future__ import annotations

import logging
import random
import threading
from dataclasses import asdict, replace
from pathlib import Path
from typing import Callable, Dict, List, Optional

from catalog_store import Catalog, load_catalogs
from config import (
    DATA_DIR,
    EVENT_LOG_LIMIT,
    HISTORY_LIMIT,
    STARTER_JOB_OFFERS,
    STARTING_HARDWARE,
)
from game import commands
from game.entities import CommandResult, GameState, Modifiers
from game.feed import generate_offers
from game.modifiers import compute_modifiers

logger = logging.getLogger(__name__)


def new_game_state(catalog: Catalog, rng: random.Random) -> GameState:
    """Day one: starter rig, the easiest jobs on offer and a first batch of feed messages."""
    starter_jobs = sorted(catalog.jobs, key=lambda job: job.complexity)[:STARTER_JOB_OFFERS]
    state = GameState(
        catalog=catalog,
        owned_hardware=tuple(key for key in STARTING_HARDWARE if catalog.hardware_by_id(key) is not None),
        available_job_offers=tuple(starter_jobs),
    )
    return generate_offers(state, rng)


class GameSession:
    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        seed: int = 7,
        *,
        state: Optional[GameState] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self.state: GameState = state if state is not None else new_game_state(catalog or Catalog(), self.rng)
        self.history: List[GameState] = []
        self.event_log: List[str] = []
        self._lock = threading.Lock()
        self._log_event(f"Day {self.state.day} started")

    @classmethod
    def from_data_dir(cls, data_dir: Path = DATA_DIR, seed: int = 7) -> "GameSession":
        loaded = load_catalogs(data_dir)
        session = cls(loaded.catalog, seed)
        for diagnostic in loaded.diagnostics:
            session._log_event(f"Catalog: {diagnostic}")
        return session

    def _log_event(self, message: str) -> None:
        self.event_log.append(message)
        self.event_log = self.event_log[-EVENT_LOG_LIMIT:]

    def _apply(self, name: str, command: Callable[..., CommandResult], *args, record: bool = True) -> CommandResult:
        with self._lock:
            result = command(self.state, *args)
            if result.diagnostic is not None:
                logger.info("%s rejected: %s", name, result.diagnostic)
                self._log_event(result.diagnostic)
            elif result.state is not self.state:
                if record:
                    self.history.append(self.state)
                    self.history = self.history[-HISTORY_LIMIT:]
                if result.state.day != self.state.day:
                    self._log_event(f"Day {result.state.day} started")
                self.state = result.state
            return result

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def advance_time(self, blocks: int = 1) -> CommandResult:
        return self._apply("advance_time", commands.advance_time, blocks, self.rng)

    def assign_job_to_slot(self, job_id: str, slot_id: int) -> CommandResult:
        return self._apply("assign_job_to_slot", commands.assign_job_to_slot, job_id, slot_id)

    def purchase_item(self, item_id: str, item_type: str) -> CommandResult:
        return self._apply("purchase_item", commands.purchase_item, item_id, item_type)

    def attempt_quick_resolution(self, job_id: str) -> CommandResult:
        return self._apply("attempt_quick_resolution", commands.attempt_quick_resolution, job_id, self.rng)

    def attempt_guided_resolution(self, job_id: str, tool_id: str) -> CommandResult:
        return self._apply(
            "attempt_guided_resolution", commands.attempt_guided_resolution, job_id, tool_id, self.rng
        )

    def act_on_feed_message(self, message_id: str, action: str) -> CommandResult:
        return self._apply("act_on_feed_message", commands.act_on_feed_message, message_id, action)

    def set_block_progress(self, fraction: float) -> CommandResult:
        return self._apply("set_block_progress", commands.set_block_progress, fraction, record=False)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def modifiers(self) -> Modifiers:
        return compute_modifiers(self.state)

    def view(self) -> Dict:
        snapshot = self.state.to_dict()
        snapshot["modifiers"] = asdict(self.modifiers)
        snapshot["event_log"] = list(self.event_log)
        return snapshot

    def restore(self, steps: int = 1) -> bool:
        """Roll back ``steps`` recorded commands from history."""
        with self._lock:
            if steps < 1 or steps > len(self.history):
                return False
            target = self.history[-steps]
            self.history = self.history[:-steps]
            # Keep the live catalog; only gameplay state is rolled back.
            self.state = replace(target, catalog=self.state.catalog)
            self._log_event(f"Rolled back {steps} step(s)")
            return True
