from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config import DATA_DIR, PROMPT_QUALITY_CEILING, PROMPTS_FILE
from csv_catalog import CatalogSection, RowReader, load_csv_section

SOURCE = "prompts"


@dataclass(frozen=True)
class PromptDefinition:
    """A guided-intervention tool.  Quality attributes are on a 0-10 scale."""

    key: str
    name: str
    clarity: float = 5.0
    specificity: float = 5.0
    adaptability: float = 5.0
    cost: int = 0

    @property
    def quality(self) -> float:
        return (self.clarity + self.specificity + self.adaptability) / 3.0


def _parse_prompt_row(key: str, reader: RowReader) -> PromptDefinition:
    return PromptDefinition(
        key=key,
        name=reader.text("Name", key),
        clarity=reader.number("Clarity", 5.0, minimum=0.0, maximum=PROMPT_QUALITY_CEILING),
        specificity=reader.number("Specificity", 5.0, minimum=0.0, maximum=PROMPT_QUALITY_CEILING),
        adaptability=reader.number("Adaptability", 5.0, minimum=0.0, maximum=PROMPT_QUALITY_CEILING),
        cost=reader.integer("Cost", 0, minimum=0),
    )


def load_prompt_catalog(path: Path = DATA_DIR / PROMPTS_FILE) -> CatalogSection[PromptDefinition]:
    return load_csv_section(SOURCE, path, "Prompt_ID", _parse_prompt_row)
