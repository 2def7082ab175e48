"""Feature set -> page/component/dependency resolution.

``PageSetResolver.resolve`` is a pure function of the catalog and the feature
ids it is given.  Resolution is additive only: features can add pages,
components, dependencies and style bundles, never remove them.

Ordering rules:

* The mandatory core pages (home, about, services) always come first.
* ``core_features`` are processed in the order given, then the selected
  features in catalog declaration order, so the caller's set iteration order
  never leaks into the result.
* When two features declare the same page, the first one processed keeps the
  page's component and style association ("first feature wins").  The same
  rule applies to two versions of one package.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .catalog import CORE_FEATURE_ID, FeatureCatalog
from .models import FeatureSpec, PackageRef, ResolvedPageSet

MANDATORY_PAGES: tuple[str, ...] = ("home", "about", "services")

# Functionality tags that imply a whole group of pages.  A feature carrying
# one of these tags always contributes every page of the group.
FUNCTIONALITY_PAGE_GROUPS: dict[str, tuple[str, ...]] = {
    "authentication": ("login", "register", "profile"),
    "commerce": ("shop", "cart"),
}


def expand_pages(spec: FeatureSpec) -> tuple[str, ...]:
    """Return every page *spec* contributes, including implied group pages."""
    pages = list(dict.fromkeys(spec.pages))
    for implied in FUNCTIONALITY_PAGE_GROUPS.get(spec.functionality, ()):
        if implied not in pages:
            pages.append(implied)
    return tuple(pages)


class PageSetResolver:
    """Expands feature ids into a ``ResolvedPageSet`` using a ``FeatureCatalog``."""

    def __init__(self, catalog: FeatureCatalog) -> None:
        self.catalog = catalog

    def resolve(
        self,
        core_features: Sequence[str] = (CORE_FEATURE_ID,),
        selected_features: Iterable[str] = (),
    ) -> ResolvedPageSet:
        """Resolve *core_features* plus *selected_features* into a frozen page set."""
        core_ids = list(dict.fromkeys(core_features))
        selected = set(selected_features) - set(core_ids)

        unknown = sorted(f for f in set(core_ids) | selected if f not in self.catalog)
        known_selected = sorted(
            (f for f in selected if f in self.catalog),
            key=self.catalog.position,
        )
        ordered = [f for f in core_ids if f in self.catalog] + known_selected

        page_owner: dict[str, str | None] = {page: None for page in MANDATORY_PAGES}
        components: dict[str, None] = {}
        style_bundles: dict[str, None] = {}
        dependencies: dict[str, PackageRef] = {}
        conflicts: list[str] = []

        for feature_id in ordered:
            spec = self.catalog.lookup(feature_id)
            assert spec is not None  # filtered above

            # Pages of one feature are claimed together, never partially.
            for page in expand_pages(spec):
                if page_owner.get(page) is None:
                    page_owner[page] = spec.id

            for component in spec.components:
                components.setdefault(component, None)
            for bundle in spec.style_bundles:
                style_bundles.setdefault(bundle, None)

            for ref in spec.dependencies:
                existing = dependencies.get(ref.name)
                if existing is None:
                    dependencies[ref.name] = ref
                elif existing.version != ref.version:
                    conflicts.append(
                        f"{ref.name}: keeping {existing.version} over {ref.version} "
                        f"requested by '{spec.id}'"
                    )

        owners = {page: owner or CORE_FEATURE_ID for page, owner in page_owner.items()}
        page_components: dict[str, tuple[str, ...]] = {}
        page_styles: dict[str, tuple[str, ...]] = {}
        for page, owner in page_owner.items():
            owner_spec = self.catalog.lookup(owner) if owner else None
            page_components[page] = owner_spec.components if owner_spec else ()
            page_styles[page] = owner_spec.style_bundles if owner_spec else ()

        return ResolvedPageSet(
            pages=tuple(owners),
            components=tuple(components),
            dependencies=tuple(dependencies.values()),
            style_bundles=tuple(style_bundles),
            page_owners=owners,
            page_components=page_components,
            page_styles=page_styles,
            features_implemented=tuple(known_selected),
            unknown_features=tuple(unknown),
            dependency_conflicts=tuple(conflicts),
        )
