"""Static feature registry.

A ``FeatureCatalog`` is an explicit lookup table handed to the resolver, so
tests and callers can substitute their own catalogs.  The packaged default
lives in ``data/features.yaml``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from src.utils import load_yaml

from .models import FeatureSpec

_DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "features.yaml"

CORE_FEATURE_ID = "core"


class FeatureCatalog:
    """Immutable mapping of ``feature_id -> FeatureSpec``.

    Iteration yields specs in declaration order; that order is the canonical
    resolution order used by ``PageSetResolver``.
    """

    def __init__(self, specs: Iterable[FeatureSpec]) -> None:
        self._specs: dict[str, FeatureSpec] = {}
        for spec in specs:
            if spec.id in self._specs:
                raise ValueError(f"Duplicate feature id in catalog: {spec.id!r}")
            self._specs[spec.id] = spec
        self._order = {feature_id: i for i, feature_id in enumerate(self._specs)}

    # -- Construction ------------------------------------------------------

    @classmethod
    def from_yaml(cls, path: str | Path) -> "FeatureCatalog":
        """Load a catalog from a YAML mapping of ``id -> spec fields``."""
        raw = load_yaml(path)
        return cls(FeatureSpec(id=feature_id, **(fields or {})) for feature_id, fields in raw.items())

    @classmethod
    def default(cls) -> "FeatureCatalog":
        """Return the packaged catalog."""
        return cls.from_yaml(_DEFAULT_CATALOG_PATH)

    # -- Lookup ------------------------------------------------------------

    def lookup(self, feature_id: str) -> FeatureSpec | None:
        """Return the spec for *feature_id*, or ``None`` when it is unknown."""
        return self._specs.get(feature_id)

    def position(self, feature_id: str) -> int:
        """Declaration index of *feature_id* (``-1`` when unknown)."""
        return self._order.get(feature_id, -1)

    def ids(self) -> list[str]:
        return list(self._specs)

    def selectable(self) -> list[FeatureSpec]:
        """All specs a caller may select (everything except ``core``)."""
        return [spec for spec in self._specs.values() if spec.id != CORE_FEATURE_ID]

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._specs

    def __iter__(self) -> Iterator[FeatureSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)
