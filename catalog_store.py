"""Loads the five catalog sources into one read-only :class:`Catalog`.

Sources fail independently: a broken ``jobs.csv`` leaves ``Catalog.jobs``
empty and records a diagnostic, while the other four still load.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from config import AI_MODELS_FILE, DATA_DIR, HARDWARE_FILE, JOBS_FILE, MESSAGES_FILE, PROMPTS_FILE
from csv_catalog import CatalogDiagnostic, CatalogSection
from hardware_catalog import HardwareDefinition, load_hardware_catalog
from job_catalog import JobDefinition, load_job_catalog
from message_catalog import MessageTemplate, load_message_catalog
from model_catalog import AiModelDefinition, load_model_catalog
from prompt_catalog import PromptDefinition, load_prompt_catalog

logger = logging.getLogger(__name__)


def _index(records: Iterable) -> Dict[str, object]:
    return {record.key: record for record in records}


@dataclass(frozen=True)
class Catalog:
    hardware: Tuple[HardwareDefinition, ...] = ()
    ai_models: Tuple[AiModelDefinition, ...] = ()
    prompts: Tuple[PromptDefinition, ...] = ()
    jobs: Tuple[JobDefinition, ...] = ()
    messages: Tuple[MessageTemplate, ...] = ()
    _lookup: Dict[str, Dict[str, object]] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lookup = {
            "hardware": _index(self.hardware),
            "ai_models": _index(self.ai_models),
            "prompts": _index(self.prompts),
            "jobs": _index(self.jobs),
            "messages": _index(self.messages),
        }
        object.__setattr__(self, "_lookup", lookup)

    def hardware_by_id(self, key: str) -> Optional[HardwareDefinition]:
        return self._lookup["hardware"].get(key)  # type: ignore[return-value]

    def model_by_id(self, key: str) -> Optional[AiModelDefinition]:
        return self._lookup["ai_models"].get(key)  # type: ignore[return-value]

    def prompt_by_id(self, key: str) -> Optional[PromptDefinition]:
        return self._lookup["prompts"].get(key)  # type: ignore[return-value]

    def job_by_id(self, key: str) -> Optional[JobDefinition]:
        return self._lookup["jobs"].get(key)  # type: ignore[return-value]

    def template_by_id(self, key: str) -> Optional[MessageTemplate]:
        return self._lookup["messages"].get(key)  # type: ignore[return-value]


@dataclass(frozen=True)
class CatalogLoadResult:
    catalog: Catalog
    diagnostics: Tuple[CatalogDiagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def _assemble(
    hardware: CatalogSection,
    ai_models: CatalogSection,
    prompts: CatalogSection,
    jobs: CatalogSection,
    messages: CatalogSection,
) -> CatalogLoadResult:
    sections = (hardware, ai_models, prompts, jobs, messages)
    diagnostics = tuple(diag for section in sections for diag in section.diagnostics)
    for diag in diagnostics:
        logger.warning("Catalog diagnostic %s", diag)
    catalog = Catalog(
        hardware=hardware.records,
        ai_models=ai_models.records,
        prompts=prompts.records,
        jobs=jobs.records,
        messages=messages.records,
    )
    logger.info(
        "Catalog loaded: %d hardware, %d models, %d prompts, %d jobs, %d message templates",
        len(catalog.hardware),
        len(catalog.ai_models),
        len(catalog.prompts),
        len(catalog.jobs),
        len(catalog.messages),
    )
    return CatalogLoadResult(catalog, diagnostics)


def load_catalogs(data_dir: Path = DATA_DIR) -> CatalogLoadResult:
    return _assemble(
        load_hardware_catalog(data_dir / HARDWARE_FILE),
        load_model_catalog(data_dir / AI_MODELS_FILE),
        load_prompt_catalog(data_dir / PROMPTS_FILE),
        load_job_catalog(data_dir / JOBS_FILE),
        load_message_catalog(data_dir / MESSAGES_FILE),
    )


async def load_catalogs_async(data_dir: Path = DATA_DIR) -> CatalogLoadResult:
    """Read the five sources concurrently in worker threads."""
    sections = await asyncio.gather(
        asyncio.to_thread(load_hardware_catalog, data_dir / HARDWARE_FILE),
        asyncio.to_thread(load_model_catalog, data_dir / AI_MODELS_FILE),
        asyncio.to_thread(load_prompt_catalog, data_dir / PROMPTS_FILE),
        asyncio.to_thread(load_job_catalog, data_dir / JOBS_FILE),
        asyncio.to_thread(load_message_catalog, data_dir / MESSAGES_FILE),
    )
    return _assemble(*sections)
