"""Snapshot persistence for the request collection.

A snapshot is a JSON document keyed by request id:

    {"version": 1, "requests": {"r1": {...}, "r2": {...}}}

Key order follows collection order (newest first). Backends return ``None``
from ``load`` when nothing was saved yet and raise ``PersistenceUnavailable``
when the snapshot cannot be read, parsed or written.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..config import SNAPSHOT_VERSION, STATE_FILE_PATH
from ..errors import PersistenceUnavailable
from ..models import RequestStatus, SessionRequest

logger = logging.getLogger(__name__)


class RequestRecord(BaseModel):
    """One persisted request. Strict: no coercion of ids, grades or slot lists."""

    model_config = ConfigDict(strict=True, extra="forbid")

    id: str = Field(min_length=1)
    created_at: str
    subject_id: str
    topic: str = ""
    student_grade: int
    preferred_times: List[str]
    format: Literal["video", "chat"]
    duration_min: Literal[20, 30]
    status: Literal["Open", "Confirmed", "Completed"]
    matched_mentor_id: Optional[str] = None

    @model_validator(mode="after")
    def mentor_matches_status(self):
        if (self.matched_mentor_id is not None) != (self.status != RequestStatus.OPEN.value):
            raise ValueError(
                f"status {self.status} inconsistent with matched mentor {self.matched_mentor_id!r}"
            )
        return self

    @classmethod
    def from_request(cls, req: SessionRequest) -> "RequestRecord":
        return cls(
            id=req.id,
            created_at=req.created_at,
            subject_id=req.subject_id,
            topic=req.topic,
            student_grade=req.student_grade,
            preferred_times=list(req.preferred_times),
            format=req.format,
            duration_min=req.duration_min,
            status=req.status.value,
            matched_mentor_id=req.matched_mentor_id,
        )

    def to_request(self) -> SessionRequest:
        return SessionRequest(
            id=self.id,
            created_at=self.created_at,
            subject_id=self.subject_id,
            topic=self.topic,
            student_grade=self.student_grade,
            preferred_times=tuple(self.preferred_times),
            format=self.format,
            duration_min=self.duration_min,
            status=RequestStatus(self.status),
            matched_mentor_id=self.matched_mentor_id,
        )


class Snapshot(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")

    version: int
    requests: Dict[str, RequestRecord]

    @field_validator("version")
    @classmethod
    def supported_version(cls, v: int) -> int:
        if v != SNAPSHOT_VERSION:
            raise ValueError(f"unsupported snapshot version {v}")
        return v

    @model_validator(mode="after")
    def keys_match_ids(self):
        for key, record in self.requests.items():
            if key != record.id:
                raise ValueError(f"snapshot key {key!r} does not match request id {record.id!r}")
        return self


def request_to_dict(req: SessionRequest) -> Dict[str, Any]:
    return RequestRecord.from_request(req).model_dump()


def dump_snapshot(requests: List[SessionRequest]) -> Dict[str, Any]:
    """Refuses to produce a snapshot that would not load back."""
    try:
        records = {req.id: request_to_dict(req) for req in requests}
    except ValidationError as e:
        raise PersistenceUnavailable(f"Request not serializable: {e}") from e
    return {"version": SNAPSHOT_VERSION, "requests": records}


def parse_snapshot(snapshot: Any) -> List[SessionRequest]:
    try:
        parsed = Snapshot.model_validate(snapshot)
    except ValidationError as e:
        raise PersistenceUnavailable(f"Corrupt request snapshot: {e}") from e
    return [record.to_request() for record in parsed.requests.values()]


class JsonFileStorage:
    """Stores the snapshot as a JSON file on disk."""

    def __init__(self, path: str = STATE_FILE_PATH):
        self.path = path

    def load(self) -> Optional[List[SessionRequest]]:
        if not os.path.exists(self.path):
            logger.info(f"No saved state at {self.path}")
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                snapshot = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceUnavailable(f"Cannot read {self.path}: {e}") from e
        return parse_snapshot(snapshot)

    def save(self, requests: List[SessionRequest]) -> None:
        snapshot = dump_snapshot(requests)
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.debug(f"Could not remove {tmp_path}")
            raise PersistenceUnavailable(f"Cannot write {self.path}: {e}") from e
        logger.debug(f"Saved {len(requests)} requests to {self.path}")


class MemoryStorage:
    """Keeps the serialized snapshot in memory (tests, throwaway sessions)."""

    def __init__(self, text: Optional[str] = None):
        self.text = text

    def load(self) -> Optional[List[SessionRequest]]:
        if self.text is None:
            return None
        try:
            snapshot = json.loads(self.text)
        except ValueError as e:
            raise PersistenceUnavailable(f"Cannot parse snapshot: {e}") from e
        return parse_snapshot(snapshot)

    def save(self, requests: List[SessionRequest]) -> None:
        self.text = json.dumps(dump_snapshot(requests), ensure_ascii=False)
