"""Feature catalog and page-set resolution.

The catalog maps feature ids (``contact-form``, ``auth``, ...) to the pages,
components, npm dependencies and style bundles they need; the resolver turns a
selection of feature ids into one deduplicated ``ResolvedPageSet``.

Quick usage::

    from src.catalog import FeatureCatalog, PageSetResolver

    resolver = PageSetResolver(FeatureCatalog.default())
    resolved = resolver.resolve(["core"], {"contact-form", "auth"})
    resolved.pages  # ('home', 'about', 'services', 'contact', 'login', ...)
"""

from src.catalog.catalog import CORE_FEATURE_ID, FeatureCatalog
from src.catalog.models import FeatureSpec, PackageRef, ResolvedPageSet
from src.catalog.resolver import (
    FUNCTIONALITY_PAGE_GROUPS,
    MANDATORY_PAGES,
    PageSetResolver,
    expand_pages,
)

__all__ = [
    "CORE_FEATURE_ID",
    "FUNCTIONALITY_PAGE_GROUPS",
    "MANDATORY_PAGES",
    "FeatureCatalog",
    "FeatureSpec",
    "PackageRef",
    "PageSetResolver",
    "ResolvedPageSet",
    "expand_pages",
]
