"""Signal Ledger: append-only log of trust signals and their entity side effects.

Invariants:
    - Signals are never edited or removed once appended
    - Only `confirm` signals touch an entity: last_confirmed_at = updated_at = signal.created_at
    - A confirm signal for a missing entity is still recorded (effect NO_OP, not an error)
    - A confirm takes effect on the entity before the signal is appended, so a reader
      that sees a confirm signal always sees its entity already stamped
    - The store call happens outside the ledger lock, so the two locks never nest

Design Decisions:
    - Fire-and-forget effect on missing entities: signals do not depend on entity existence
    - One clock read per signal: the signal timestamp and the confirmation stamp are equal
    - Signal type is an open string: unknown types are recorded like any non-confirm type
"""

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from uuid import uuid4

from trustmap.core.clock import Clock
from trustmap.core.domain_types import SignalId, EntityId, SignalType, SignalEffect
from trustmap.core.entity_store import EntityStore
from trustmap.core.errors import InvalidInputError
from trustmap.core.records import Entity, Signal


def _new_signal_id() -> SignalId:
    return SignalId(str(uuid4()))


@dataclass(frozen=True)
class SignalReceipt:
    """The appended signal plus what it did to the referenced entity."""
    signal: Signal
    effect: SignalEffect
    entity: Entity | None = None


class SignalLedger:
    """Append-only signal log bound to one EntityStore."""

    def __init__(
        self,
        store: EntityStore,
        clock: Clock,
        id_factory: Callable[[], SignalId] = _new_signal_id,
    ):
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._signals: list[Signal] = []
        self._lock = threading.Lock()

    def add(
        self, entity_id: str, signal_type: str, comment: str | None = None,
    ) -> SignalReceipt:
        """Record a signal; apply the confirm side effect when the entity exists."""
        if not entity_id:
            raise InvalidInputError("entity_id is required", "entity_id")
        if not signal_type:
            raise InvalidInputError("type is required", "type")

        signal = Signal(
            id=self._id_factory(),
            entity_id=EntityId(entity_id),
            type=str(signal_type.value if isinstance(signal_type, SignalType) else signal_type),
            created_at=self._clock.now(),
            comment=comment,
        )
        if signal.type != SignalType.CONFIRM:
            receipt = SignalReceipt(signal, SignalEffect.RECORDED)
        else:
            entity = self._store.mark_confirmed(entity_id, signal.created_at)
            if entity is None:
                receipt = SignalReceipt(signal, SignalEffect.NO_OP)
            else:
                receipt = SignalReceipt(signal, SignalEffect.CONFIRMED, entity)

        with self._lock:
            self._signals.append(signal)
        return receipt

    def list_for(self, entity_id: str) -> list[Signal]:
        with self._lock:
            return [s for s in self._signals if s.entity_id == entity_id]

    def list_all(self) -> list[Signal]:
        with self._lock:
            return list(self._signals)

    def load(self, signals: Iterable[Signal]) -> int:
        """Append pre-built signals (seed data) without side effects."""
        batch = list(signals)
        with self._lock:
            self._signals.extend(batch)
        return len(batch)

    def reset(self) -> None:
        with self._lock:
            self._signals.clear()
