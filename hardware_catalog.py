from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config import DATA_DIR, HARDWARE_FILE
from csv_catalog import CatalogSection, RowReader, load_csv_section

SOURCE = "hardware"


@dataclass(frozen=True)
class HardwareDefinition:
    key: str
    name: str
    processing_power: float = 0.0
    memory: float = 0.0
    energy_efficiency: float = 0.5
    cost: int = 0


def _parse_hardware_row(key: str, reader: RowReader) -> HardwareDefinition:
    return HardwareDefinition(
        key=key,
        name=reader.text("Name", key),
        processing_power=reader.number("Processing_Power", 0.0, minimum=0.0, maximum=1.0),
        memory=reader.number("Memory", 0.0, minimum=0.0, maximum=1.0),
        energy_efficiency=reader.number("Energy_Efficiency", 0.5, minimum=0.0, maximum=1.0),
        cost=reader.integer("Cost", 0, minimum=0),
    )


def load_hardware_catalog(path: Path = DATA_DIR / HARDWARE_FILE) -> CatalogSection[HardwareDefinition]:
    return load_csv_section(SOURCE, path, "Hardware_ID", _parse_hardware_row)
