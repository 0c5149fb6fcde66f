"""Directory Service: composes store, ledger, guides and clock for the API layer.

Invariants:
    - The only place where core components are wired together
    - Query reads take one store snapshot and run the pure pipeline on it
      (the store lock is never held across the pipeline)
    - Mutations and their outcomes are logged here, never in core
    - open_status is always evaluated with the injected Clock and configured zone

Design Decisions:
    - Singleton `directory` initialized on startup (lifespan), exposed via get_directory
      dependency, overridable in tests
    - Service returns core records; routes convert to response schemas
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo

from trustmap.core.clock import Clock, SystemClock
from trustmap.core.domain_types import OpenStatus, SignalEffect
from trustmap.core.entity_store import EntityStore
from trustmap.core.guide_catalog import GuideCatalog
from trustmap.core.query_engine import (
    EntityQuery, QueryResult, run_query,
    DEFAULT_LIST_LIMIT, DEFAULT_POPULAR_LIMIT,
)
from trustmap.core.records import Entity, Guide, Signal
from trustmap.core.signal_ledger import SignalLedger, SignalReceipt
from trustmap.core.work_hours import (
    evaluate_open_status, format_work_hours, open_status_label, resolve_timezone,
)
from trustmap.infrastructure.seed_loader import SeedData, load_seed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HoursView:
    entity_id: str
    open_status: OpenStatus
    label: str
    schedule_lines: list[str]


class DirectoryService:
    """Facade over the in-memory directory."""

    def __init__(
        self,
        clock: Clock | None = None,
        timezone: str | tzinfo = "UTC",
        guides: GuideCatalog | None = None,
        default_list_limit: int = DEFAULT_LIST_LIMIT,
        default_popular_limit: int = DEFAULT_POPULAR_LIMIT,
    ):
        self.clock = clock or SystemClock()
        self.timezone = resolve_timezone(timezone)
        self.store = EntityStore(self.clock)
        self.ledger = SignalLedger(self.store, self.clock)
        self.guides = guides or GuideCatalog()
        self.default_list_limit = default_list_limit
        self.default_popular_limit = default_popular_limit

    @classmethod
    def from_seed(cls, seed: SeedData, **kwargs) -> "DirectoryService":
        service = cls(guides=GuideCatalog(seed.guides), **kwargs)
        service.store.load(seed.entities)
        service.ledger.load(seed.signals)
        return service

    # --- Entities -------------------------------------------------------------

    def query_entities(self, query: EntityQuery) -> QueryResult:
        return run_query(
            self.store.list(), query,
            default_limit=self.default_list_limit,
            default_popular_limit=self.default_popular_limit,
        )

    def get_entity(self, entity_id: str) -> Entity:
        return self.store.get(entity_id)

    def create_entity(self, fields: Mapping[str, object]) -> Entity:
        entity = self.store.create(fields)
        logger.info(f"Entity created: {entity.title}", extra={"entity_id": entity.id})
        return entity

    def update_entity(self, entity_id: str, changes: Mapping[str, object]) -> Entity:
        entity = self.store.update(entity_id, changes)
        logger.info(
            f"Entity updated: {', '.join(sorted(changes)) or 'no fields'}",
            extra={"entity_id": entity_id},
        )
        return entity

    def archive_entity(self, entity_id: str) -> Entity:
        entity = self.store.soft_delete(entity_id)
        logger.info("Entity archived", extra={"entity_id": entity_id})
        return entity

    def list_areas(self) -> list[str]:
        return self.store.distinct_areas()

    def list_tags(self) -> list[str]:
        return self.store.distinct_tags()

    # --- Work hours -----------------------------------------------------------

    def open_status(self, entity: Entity) -> OpenStatus:
        return evaluate_open_status(entity.work_hours, self.clock.now(), self.timezone)

    def hours_view(self, entity_id: str) -> HoursView:
        entity = self.store.get(entity_id)
        status = self.open_status(entity)
        return HoursView(
            entity_id=entity.id,
            open_status=status,
            label=open_status_label(status),
            schedule_lines=format_work_hours(entity.work_hours),
        )

    # --- Signals --------------------------------------------------------------

    def add_signal(
        self, entity_id: str, signal_type: str, comment: str | None = None,
    ) -> SignalReceipt:
        receipt = self.ledger.add(entity_id, signal_type, comment)
        extra = {
            "entity_id": entity_id,
            "signal_id": receipt.signal.id,
            "signal_type": receipt.signal.type,
            "effect": receipt.effect.value,
        }
        if receipt.effect is SignalEffect.NO_OP:
            logger.warning("Confirm signal for unknown entity recorded", extra=extra)
        else:
            logger.info("Signal recorded", extra=extra)
        return receipt

    def list_signals(self, entity_id: str | None = None) -> list[Signal]:
        if entity_id:
            return self.ledger.list_for(entity_id)
        return self.ledger.list_all()

    # --- Guides ---------------------------------------------------------------

    def list_guides(self, category: str | None = None) -> list[Guide]:
        return self.guides.list(category)

    def get_guide(self, guide_id: str) -> Guide:
        return self.guides.get(guide_id)


# Singleton (initialized on startup)
directory: DirectoryService | None = None


def init_directory(
    timezone: str = "UTC",
    seed_path: str | None = None,
    clock: Clock | None = None,
    **kwargs,
) -> DirectoryService:
    """Build the process-wide directory, optionally from a seed file."""
    global directory
    clock = clock or SystemClock()
    if seed_path:
        directory = DirectoryService.from_seed(
            load_seed(seed_path, clock.now()), clock=clock, timezone=timezone, **kwargs,
        )
    else:
        directory = DirectoryService(clock=clock, timezone=timezone, **kwargs)
    logger.info(f"Directory initialized with {directory.store.count()} entities")
    return directory


def get_directory() -> DirectoryService:
    """FastAPI dependency for the directory service."""
    if not directory:
        raise RuntimeError("Directory not initialized")
    return directory
