from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

try:
    import pygame  # type: ignore
except Exception:
    pygame = None

from config import DATA_DIR, DRIVER_FPS, TICK_SPEEDS_MS, TOTAL_SLOTS
from game import GameSession
from game.entities import ERROR
from game.feed import ACCEPT, ARCHIVE
from message_catalog import ACTION_ACCEPT_JOB

logger = logging.getLogger(__name__)


def best_owned_prompt(session: GameSession) -> Optional[str]:
    catalog = session.state.catalog
    prompts = [catalog.prompt_by_id(key) for key in session.state.owned_prompts]
    prompts = [prompt for prompt in prompts if prompt is not None]
    if not prompts:
        return None
    return max(prompts, key=lambda prompt: prompt.quality).key


def autopilot_step(session: GameSession) -> None:
    """Play one block the way a cautious player would."""
    for message in session.state.active_feed_messages:
        if message.action == ACTION_ACCEPT_JOB and session.act_on_feed_message(message.id, ACCEPT).ok:
            continue
        session.act_on_feed_message(message.id, ARCHIVE)

    prompt = best_owned_prompt(session)
    for job in session.state.active_jobs:
        if job.status != ERROR:
            continue
        if prompt is not None:
            session.attempt_guided_resolution(job.job_id, prompt)
        else:
            session.attempt_quick_resolution(job.job_id)

    for slot in range(1, TOTAL_SLOTS + 1):
        offers = session.state.available_job_offers
        if offers and session.state.job_in_slot(slot) is None:
            session.assign_job_to_slot(offers[0].key, slot)

    session.advance_time(1)


def status_line(session: GameSession) -> str:
    state = session.state
    mods = session.modifiers
    return (
        f"day={state.day} blocks_left={state.time_blocks_remaining} "
        f"credits={state.credits} rep={state.reputation} health={state.health} "
        f"jobs[active={len(state.active_jobs)},done={len(state.completed_job_ids)},offers={len(state.available_job_offers)}] "
        f"feed={len(state.active_feed_messages)} "
        f"mods[spd={mods.speed_multiplier:.2f},err={mods.error_multiplier:.2f},fix={mods.resolution_multiplier:.2f}]"
    )


def run_headless(blocks: int, seed: int, data_dir: Path, as_json: bool = False) -> GameSession:
    session = GameSession.from_data_dir(data_dir, seed)
    for _ in range(blocks):
        autopilot_step(session)

    if as_json:
        print(json.dumps(session.view(), indent=2))
    else:
        print(f"headless_done {status_line(session)}")
    return session


class RealtimeDriver:
    """Advances one block every ``TICK_SPEEDS_MS[speed]`` milliseconds of wall time."""

    def __init__(self, session: GameSession, speed: str = "medium"):
        if pygame is None:
            raise RuntimeError("pygame is required for realtime mode. Relaunch with --headless.")
        if speed not in TICK_SPEEDS_MS:
            raise ValueError(f"unknown speed {speed!r}")
        pygame.init()
        self.session = session
        self.interval_ms = TICK_SPEEDS_MS[speed]
        self.clock = pygame.time.Clock()
        self.elapsed_ms = 0
        self.running = True

    def stop(self) -> None:
        self.running = False

    def step(self, dt_ms: int) -> int:
        """Feed ``dt_ms`` of wall time; returns how many blocks were advanced."""
        self.elapsed_ms += dt_ms
        advanced = 0
        while self.elapsed_ms >= self.interval_ms:
            self.elapsed_ms -= self.interval_ms
            self.session.advance_time(1)
            advanced += 1
            print(status_line(self.session))
        self.session.set_block_progress(self.elapsed_ms / self.interval_ms)
        return advanced

    def run(self, days: Optional[int] = None) -> None:
        last_day = None if days is None else self.session.state.day + days
        try:
            while self.running:
                self.step(self.clock.tick(DRIVER_FPS))
                if last_day is not None and self.session.state.day >= last_day:
                    self.stop()
        finally:
            pygame.quit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Vibe Coding Simulator core")
    parser.add_argument("--headless", action="store_true", help="run the autopilot without a wall clock")
    parser.add_argument("--blocks", type=int, default=80, help="headless blocks to run")
    parser.add_argument("--seed", type=int, default=7, help="random seed")
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR, help="directory holding the catalog CSVs")
    parser.add_argument("--speed", choices=sorted(TICK_SPEEDS_MS), default="medium", help="realtime tick speed")
    parser.add_argument("--days", type=int, default=None, help="stop realtime mode after this many days")
    parser.add_argument("--json", action="store_true", help="print the final headless state as JSON")
    parser.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, ...)")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.headless:
        run_headless(args.blocks, args.seed, args.data_dir, args.json)
        return

    session = GameSession.from_data_dir(args.data_dir, args.seed)
    try:
        driver = RealtimeDriver(session, args.speed)
    except RuntimeError as exc:
        print(f"Startup error: {exc}", file=sys.stderr)
        raise SystemExit(1)

    try:
        driver.run(args.days)
    except KeyboardInterrupt:
        driver.stop()
    print(status_line(session))


if __name__ == "__main__":
    main()
