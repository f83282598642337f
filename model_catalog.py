from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config import AI_MODELS_FILE, DATA_DIR
from csv_catalog import CatalogSection, RowReader, load_csv_section

SOURCE = "ai_models"


@dataclass(frozen=True)
class AiModelDefinition:
    key: str
    name: str
    accuracy: float = 0.0
    inference_speed: float = 0.0
    specialization: str = ""
    cost: int = 0


def _parse_model_row(key: str, reader: RowReader) -> AiModelDefinition:
    return AiModelDefinition(
        key=key,
        name=reader.text("Model_Name", key),
        accuracy=reader.number("Accuracy", 0.0, minimum=0.0, maximum=1.0),
        inference_speed=reader.number("Inference_Speed", 0.0, minimum=0.0, maximum=1.0),
        specialization=reader.text("Specialization"),
        cost=reader.integer("Cost", 0, minimum=0),
    )


def load_model_catalog(path: Path = DATA_DIR / AI_MODELS_FILE) -> CatalogSection[AiModelDefinition]:
    return load_csv_section(SOURCE, path, "Model_ID", _parse_model_row)
