"""Signal Routes: append and list trust signals.

Invariants:
    - POST always records the signal (201), even when the entity does not exist
    - The receipt's effect tells the caller whether an entity was confirmed

Design Decisions:
    - entity_id filter on GET is optional: no filter returns the whole ledger
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from trustmap.schemas.signal import (
    SignalCreate, SignalListResponse, SignalReceiptResponse, SignalResponse,
)
from trustmap.services.directory_service import DirectoryService, get_directory

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/signals", tags=["signals"])


@router.post(
    "", response_model=SignalReceiptResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_signal(
    body: SignalCreate, directory: DirectoryService = Depends(get_directory),
):
    receipt = directory.add_signal(body.entity_id, body.type, body.comment)
    return SignalReceiptResponse(
        signal=SignalResponse.from_record(receipt.signal),
        effect=receipt.effect,
    )


@router.get("", response_model=SignalListResponse)
async def list_signals(
    entity_id: str | None = Query(None),
    directory: DirectoryService = Depends(get_directory),
):
    signals = directory.list_signals(entity_id)
    return SignalListResponse(
        signals=[SignalResponse.from_record(s) for s in signals],
        total=len(signals),
    )
