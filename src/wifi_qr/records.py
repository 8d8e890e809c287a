"""Credential records and the lookup collaborator interface."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .notify import Notifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CredentialRecord:
    id: str
    ssid: str
    password: str = ""
    encryption: str = "WPA"
    hidden: bool = False

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


class RecordLookupError(Exception):
    """Raised by a lookup collaborator that could not answer.

    The pipeline treats it as a miss for the affected identifiers.
    """


class RecordLookup(Protocol):
    def lookup(self, record_id: str) -> Optional[CredentialRecord]:
        ...

    def lookup_many(self, record_ids: Iterable[str]) -> Mapping[str, CredentialRecord]:
        ...


class InMemoryRecords:
    """Process-local record store backing the development app and the CLI."""

    def __init__(
        self,
        records: Iterable[CredentialRecord] = (),
        notifier: Optional["Notifier"] = None,
    ) -> None:
        self._records: Dict[str, CredentialRecord] = {}
        self._notifier = notifier
        for record in records:
            self._records[record.id] = record

    def __len__(self) -> int:
        return len(self._records)

    def lookup(self, record_id: str) -> Optional[CredentialRecord]:
        return self._records.get(record_id)

    def lookup_many(self, record_ids: Iterable[str]) -> Mapping[str, CredentialRecord]:
        return {
            record_id: self._records[record_id]
            for record_id in record_ids
            if record_id in self._records
        }

    def all(self) -> List[CredentialRecord]:
        return list(self._records.values())

    def create(
        self,
        ssid: str,
        password: str = "",
        encryption: str = "WPA",
        hidden: bool = False,
    ) -> CredentialRecord:
        record = CredentialRecord(
            id=str(uuid.uuid4()),
            ssid=ssid,
            password=password or "",
            encryption=encryption,
            hidden=hidden,
        )
        self._records[record.id] = record
        logger.info("Created Wi-Fi record", extra={"record_id": record.id})
        if self._notifier is not None:
            from .notify import notify_created

            notify_created(self._notifier, record)
        return record
