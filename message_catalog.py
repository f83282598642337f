from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config import DATA_DIR, FEED_MESSAGE_TYPES, MESSAGES_FILE
from csv_catalog import CatalogDiagnostic, CatalogSection, RowReader, load_csv_section

SOURCE = "messages"

ACTION_ACCEPT_JOB = "AcceptJob"
ACTION_OPEN = "Open"
VALID_ACTIONS = {ACTION_ACCEPT_JOB, ACTION_OPEN}


@dataclass(frozen=True)
class MessageTemplate:
    """Catalog row a feed message is instantiated from.

    ``advertises`` names a hardware/model/prompt id; the template stops
    appearing once the player owns it.  ``min_day`` holds the template back
    until that day.
    """

    key: str
    type: str = "System"
    title: str = ""
    body: str = ""
    probability: float = 0.5
    action: Optional[str] = None
    job_id: str = ""
    advertises: str = ""
    min_day: int = 1


def _parse_message_row(key: str, reader: RowReader) -> MessageTemplate:
    message_type = reader.text("Type", "System").capitalize()
    if message_type not in FEED_MESSAGE_TYPES:
        reader.diagnostics.append(
            CatalogDiagnostic(SOURCE, f"line {reader.line}: unknown Type {message_type!r}, using 'System'")
        )
        message_type = "System"

    action: Optional[str] = reader.text("Action") or None
    if action is not None and action not in VALID_ACTIONS:
        reader.diagnostics.append(
            CatalogDiagnostic(SOURCE, f"line {reader.line}: unknown Action {action!r}, message has no action")
        )
        action = None

    job_id = reader.text("Job_ID")
    if action == ACTION_ACCEPT_JOB and not job_id:
        reader.diagnostics.append(
            CatalogDiagnostic(SOURCE, f"line {reader.line}: AcceptJob without Job_ID, message has no action")
        )
        action = None

    return MessageTemplate(
        key=key,
        type=message_type,
        title=reader.text("Title"),
        body=reader.text("Body"),
        probability=reader.number("Probability", 0.5, minimum=0.0, maximum=1.0),
        action=action,
        job_id=job_id,
        advertises=reader.text("Advertises"),
        min_day=reader.integer("Min_Day", 1, minimum=1),
    )


def load_message_catalog(path: Path = DATA_DIR / MESSAGES_FILE) -> CatalogSection[MessageTemplate]:
    return load_csv_section(SOURCE, path, "Message_ID", _parse_message_row)
