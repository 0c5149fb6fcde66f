"""Signal Schemas: request/response models for trust signals.

Invariants:
    - SignalCreate forbids extra keys; type is an open string (unknown types are recorded)
    - SignalReceiptResponse reports the effect, so a no-op confirm is visible to the caller
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from trustmap.core.domain_types import SignalEffect
from trustmap.core.records import Signal


class SignalCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entity_id: str = Field(min_length=1, max_length=200)
    type: str = Field(min_length=1, max_length=50)
    comment: str | None = Field(None, max_length=2000)


class SignalResponse(BaseModel):
    id: str
    entity_id: str
    type: str
    comment: str | None
    created_at: datetime

    @classmethod
    def from_record(cls, signal: Signal) -> "SignalResponse":
        return cls(
            id=signal.id,
            entity_id=signal.entity_id,
            type=signal.type,
            comment=signal.comment,
            created_at=signal.created_at,
        )


class SignalReceiptResponse(BaseModel):
    signal: SignalResponse
    effect: SignalEffect


class SignalListResponse(BaseModel):
    signals: list[SignalResponse]
    total: int
