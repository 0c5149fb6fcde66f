"""Guide Catalog: read-only lookup of editorial guides by id and category.

Invariants:
    - Contents fixed at construction; no mutation path
    - list() keeps source order

Design Decisions:
    - No lock: the tuple is never replaced after __init__
"""

from collections.abc import Iterable

from trustmap.core.errors import ResourceNotFoundError
from trustmap.core.records import Guide


class GuideCatalog:
    def __init__(self, guides: Iterable[Guide] = ()):
        self._guides: tuple[Guide, ...] = tuple(guides)

    def list(self, category: str | None = None) -> list[Guide]:
        if category:
            return [g for g in self._guides if g.category == category]
        return list(self._guides)

    def get(self, guide_id: str) -> Guide:
        for guide in self._guides:
            if guide.id == guide_id:
                return guide
        raise ResourceNotFoundError("Guide", guide_id)
