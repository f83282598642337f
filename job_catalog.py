from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config import DATA_DIR, JOBS_FILE
from csv_catalog import CatalogSection, RowReader, load_csv_section

SOURCE = "jobs"


@dataclass(frozen=True)
class JobDefinition:
    """A contract that can be run on a GPU slot.

    ``baseline_duration`` is measured in time blocks at a speed multiplier of
    1.0.  ``yolo_success`` is the base chance that a quick fix clears an error.
    """

    key: str
    name: str
    complexity: int = 1
    domain: str = ""
    baseline_duration: float = 4.0
    error_rate: float = 0.1
    yolo_success: float = 0.7
    reward: int = 0
    reputation_reward: int = 0
    cost: int = 0


def _parse_job_row(key: str, reader: RowReader) -> JobDefinition:
    return JobDefinition(
        key=key,
        name=reader.text("Name", key),
        complexity=reader.integer("Complexity", 1, minimum=1),
        domain=reader.text("Domain"),
        baseline_duration=reader.number("Baseline_Time", 4.0, minimum=1.0),
        error_rate=reader.number("Error_Rate", 0.1, minimum=0.0, maximum=1.0),
        yolo_success=reader.number("YOLO_Success", 0.7, minimum=0.0, maximum=1.0),
        reward=reader.integer("Reward", 0, minimum=0),
        reputation_reward=reader.integer("Reputation_Reward", 0, minimum=0),
        cost=reader.integer("Cost", 0, minimum=0),
    )


def load_job_catalog(path: Path = DATA_DIR / JOBS_FILE) -> CatalogSection[JobDefinition]:
    return load_csv_section(SOURCE, path, "Job_ID", _parse_job_row)
