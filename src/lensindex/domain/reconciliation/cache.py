"""Two-tier entity cache used during one reconciliation pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


@dataclass(slots=True)
class EntityCache[TEntity]:
    """Persisted snapshot plus a pass-local overlay, both keyed by derived id.

    Lookups consult the overlay first so that entities created earlier in the
    same pass win over the snapshot. Created entities are registered in the
    overlay immediately.
    """

    snapshot: dict[str, TEntity] = field(default_factory=dict)
    overlay: dict[str, TEntity] = field(default_factory=dict)

    @classmethod
    def preload(
        cls,
        entities: Iterable[TEntity],
        *,
        key: Callable[[TEntity], str],
    ) -> EntityCache[TEntity]:
        return cls(snapshot={key(entity): entity for entity in entities})

    def get(self, key: str) -> TEntity | None:
        entity = self.overlay.get(key)
        if entity is None:
            entity = self.snapshot.get(key)
        return entity

    def __contains__(self, key: object) -> bool:
        return key in self.overlay or key in self.snapshot

    def get_or_create(self, key: str, factory: Callable[[], TEntity]) -> tuple[TEntity, bool]:
        """Return the cached entity for ``key``, building it with ``factory`` if absent."""

        existing = self.get(key)
        if existing is not None:
            return existing, False
        created = factory()
        self.overlay[key] = created
        return created, True

    @property
    def created(self) -> list[TEntity]:
        return list(self.overlay.values())

    def values(self) -> list[TEntity]:
        merged = dict(self.snapshot)
        merged.update(self.overlay)
        return list(merged.values())
