"""Centralised configuration constants for the Vibe Coding Simulator."""
from __future__ import annotations

from pathlib import Path

# ---------------------------------------------------------------------------
# File paths
# ---------------------------------------------------------------------------
DATA_DIR: Path = Path(__file__).resolve().parent / "data"
HARDWARE_FILE: str = "hardware.csv"
AI_MODELS_FILE: str = "ai_models.csv"
PROMPTS_FILE: str = "prompts.csv"
JOBS_FILE: str = "jobs.csv"
MESSAGES_FILE: str = "messages.csv"

# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------
TIME_BLOCKS_PER_DAY: int = 8
DAILY_HEALTH_DECAY: int = 5            # health lost at every day rollover
HARDWARE_DAILY_UPKEEP: int = 20        # credits per owned rig at 0% energy efficiency

# ---------------------------------------------------------------------------
# GPU slots and jobs
# ---------------------------------------------------------------------------
TOTAL_SLOTS: int = 4
ERROR_THRESHOLDS: tuple[float, ...] = (0.25, 0.50, 0.75)
PROGRESS_EPSILON: float = 1e-9

# ---------------------------------------------------------------------------
# Player resources
# ---------------------------------------------------------------------------
STARTING_CREDITS: int = 1000
STARTING_REPUTATION: int = 0
STARTING_HEALTH: int = 100
MAX_HEALTH: int = 100
STARTING_HARDWARE: tuple[str, ...] = ("hw_001",)
STARTER_JOB_OFFERS: int = 3            # lowest-complexity jobs offered on day one

# ---------------------------------------------------------------------------
# Modifier coefficients (hardware / AI model attributes are on a 0-1 scale)
# ---------------------------------------------------------------------------
SPEED_PER_PROCESSING_POWER: float = 1.0
ERROR_REDUCTION_PER_MEMORY: float = 0.2
SPEED_PER_INFERENCE_SPEED: float = 0.1
ERROR_REDUCTION_PER_ACCURACY: float = 0.2
RESOLUTION_PER_ACCURACY: float = 0.3
ERROR_MULTIPLIER_FLOOR: float = 0.1

# ---------------------------------------------------------------------------
# Error resolution
# ---------------------------------------------------------------------------
YOLO_REPUTATION_PENALTY: int = 5       # reputation lost when a YOLO fix kills the job
YOLO_HEALTH_PENALTY: int = 2
GUIDED_HEALTH_COST: int = 1            # paid on every guided attempt, success or not
PROMPT_QUALITY_CEILING: float = 10.0   # prompt attributes are on a 0-10 scale

# ---------------------------------------------------------------------------
# Feed
# ---------------------------------------------------------------------------
MAX_FEED_MESSAGES: int = 5
MAX_ARCHIVED_FEED_MESSAGES: int = 25
MESSAGES_PER_DAY: int = 3
FEED_COOLDOWN_DAYS: int = 3
FEED_MESSAGE_TYPES: tuple[str, ...] = ("Social", "Direct", "System")
HIGH_COMPLEXITY_LEVEL: int = 4         # job complexity that counts as a premium offer
HIGH_COMPLEXITY_DAY: int = 5           # premium offers get boosted from this day on
HIGH_COMPLEXITY_PROBABILITY_BOOST: float = 1.5

# ---------------------------------------------------------------------------
# Session / drivers
# ---------------------------------------------------------------------------
HISTORY_LIMIT: int = 64
EVENT_LOG_LIMIT: int = 12
DRIVER_FPS: int = 30
TICK_SPEEDS_MS: dict[str, int] = {
    "slow": 10000,
    "medium": 5000,
    "fast": 2000,
}
