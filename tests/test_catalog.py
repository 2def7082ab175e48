"""Unit tests for the feature catalog and page-set resolver (src.catalog).

Tests cover:
- PackageRef parsing (plain, scoped, unversioned, invalid)
- FeatureSpec dependency coercion
- FeatureCatalog construction, lookup, ordering, duplicate detection
- PageSetResolver: mandatory pages, ordering, dedupe, unknown features,
  atomic page groups, first-feature-wins tie-break, dependency conflicts
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.catalog import (
    CORE_FEATURE_ID,
    MANDATORY_PAGES,
    FeatureCatalog,
    FeatureSpec,
    PackageRef,
    PageSetResolver,
    expand_pages,
)

pytestmark = pytest.mark.unit


@pytest.fixture(scope="module")
def catalog() -> FeatureCatalog:
    return FeatureCatalog.default()


@pytest.fixture(scope="module")
def resolver(catalog: FeatureCatalog) -> PageSetResolver:
    return PageSetResolver(catalog)


# ---------------------------------------------------------------------------
# PackageRef / FeatureSpec
# ---------------------------------------------------------------------------


class TestPackageRef:
    def test_parse_versioned(self):
        ref = PackageRef.parse("validator@^13.11.0")
        assert ref.name == "validator"
        assert ref.version == "^13.11.0"

    def test_parse_scoped(self):
        ref = PackageRef.parse("@types/validator@^13.11.7")
        assert ref.name == "@types/validator"
        assert ref.version == "^13.11.7"

    def test_parse_unversioned_defaults_to_latest(self):
        assert PackageRef.parse("react").version == "latest"
        assert PackageRef.parse("@scope/pkg").name == "@scope/pkg"

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            PackageRef.parse("bad name@1")

    def test_str_round_trip(self):
        assert str(PackageRef.parse("date-fns@^2.30.0")) == "date-fns@^2.30.0"

    def test_frozen(self):
        ref = PackageRef(name="react", version="^18")
        with pytest.raises(ValidationError):
            ref.version = "^19"


class TestFeatureSpec:
    def test_dependency_strings_are_parsed(self):
        spec = FeatureSpec(id="x", dependencies=["a@1", "@b/c@^2"])
        assert [d.name for d in spec.dependencies] == ["a", "@b/c"]

    def test_none_dependencies(self):
        assert FeatureSpec(id="x", dependencies=None).dependencies == ()

    def test_requires_id(self):
        with pytest.raises(ValidationError):
            FeatureSpec(id="")


# ---------------------------------------------------------------------------
# FeatureCatalog
# ---------------------------------------------------------------------------


class TestFeatureCatalog:
    def test_default_catalog_contents(self, catalog: FeatureCatalog):
        for feature_id in (
            "core", "contact-form", "gallery", "testimonials", "auth", "reviews",
            "booking", "chat", "blog", "portfolio", "ecommerce", "security", "analytics",
        ):
            assert feature_id in catalog

    def test_lookup_known(self, catalog: FeatureCatalog):
        spec = catalog.lookup("contact-form")
        assert spec is not None
        assert spec.pages == ("contact",)
        assert "ContactForm" in spec.components

    def test_lookup_unknown_returns_none(self, catalog: FeatureCatalog):
        assert catalog.lookup("flux-capacitor") is None

    def test_declaration_order(self, catalog: FeatureCatalog):
        ids = catalog.ids()
        assert ids[0] == CORE_FEATURE_ID
        assert catalog.position("gallery") < catalog.position("portfolio")
        assert catalog.position("nope") == -1

    def test_selectable_excludes_core(self, catalog: FeatureCatalog):
        assert CORE_FEATURE_ID not in [s.id for s in catalog.selectable()]
        assert len(catalog.selectable()) == len(catalog) - 1

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            FeatureCatalog([FeatureSpec(id="a"), FeatureSpec(id="a")])

    def test_from_yaml(self, tmp_path: Path):
        path = tmp_path / "features.yaml"
        path.write_text(
            "core:\n  pages: [home]\nextra:\n  pages: [extra]\n  dependencies: ['x@1']\n",
            encoding="utf-8",
        )
        custom = FeatureCatalog.from_yaml(path)
        assert custom.ids() == ["core", "extra"]
        assert custom.lookup("extra").dependencies[0].name == "x"

    def test_iteration_yields_specs(self, catalog: FeatureCatalog):
        assert all(isinstance(spec, FeatureSpec) for spec in catalog)


# ---------------------------------------------------------------------------
# PageSetResolver
# ---------------------------------------------------------------------------


class TestResolveBasics:
    def test_core_only(self, resolver: PageSetResolver):
        resolved = resolver.resolve()
        assert resolved.pages == MANDATORY_PAGES
        assert resolved.components == ("Navigation", "LoadingSpinner", "ErrorFallback")
        assert resolved.style_bundles == ("main", "navigation")
        assert resolved.features_implemented == ()

    def test_mandatory_pages_even_without_core(self, resolver: PageSetResolver):
        resolved = resolver.resolve((), {"gallery"})
        assert resolved.pages[:3] == MANDATORY_PAGES
        assert "gallery" in resolved.pages

    def test_contact_form(self, resolver: PageSetResolver):
        resolved = resolver.resolve((CORE_FEATURE_ID,), {"contact-form"})
        assert resolved.pages == ("home", "about", "services", "contact")
        deps = resolved.dependency_map()
        assert deps["validator"] == "^13.11.0"
        assert "@types/validator" in deps
        assert resolved.page_owners["contact"] == "contact-form"
        assert resolved.page_components["contact"] == ("ContactForm",)
        assert resolved.features_implemented == ("contact-form",)

    def test_auth_adds_group_atomically(self, resolver: PageSetResolver):
        resolved = resolver.resolve((CORE_FEATURE_ID,), {"auth"})
        assert resolved.pages[3:] == ("login", "register", "profile")
        assert {resolved.page_owners[p] for p in ("login", "register", "profile")} == {"auth"}

    def test_unknown_feature_is_reported_not_fatal(self, resolver: PageSetResolver):
        resolved = resolver.resolve((CORE_FEATURE_ID,), {"flux-capacitor"})
        assert resolved.pages == MANDATORY_PAGES
        assert resolved.unknown_features == ("flux-capacitor",)
        assert resolved.features_implemented == ()

    def test_unknown_features_sorted(self, resolver: PageSetResolver):
        resolved = resolver.resolve((CORE_FEATURE_ID,), {"zeta", "alpha", "gallery"})
        assert resolved.unknown_features == ("alpha", "zeta")

    def test_feature_without_pages(self, resolver: PageSetResolver):
        resolved = resolver.resolve((CORE_FEATURE_ID,), {"analytics"})
        assert resolved.pages == MANDATORY_PAGES
        assert "AnalyticsProvider" in resolved.components
        assert "web-vitals" in resolved.dependency_map()


class TestResolveOrdering:
    def test_selection_order_does_not_matter(self, resolver: PageSetResolver):
        a = resolver.resolve((CORE_FEATURE_ID,), ["booking", "gallery", "contact-form"])
        b = resolver.resolve((CORE_FEATURE_ID,), ["contact-form", "booking", "gallery"])
        assert a == b
        assert a.pages == ("home", "about", "services", "contact", "gallery", "booking")

    def test_deterministic_across_runs(self, resolver: PageSetResolver):
        selection = {"auth", "blog", "reviews", "ecommerce"}
        assert resolver.resolve((CORE_FEATURE_ID,), selection) == resolver.resolve(
            (CORE_FEATURE_ID,), set(selection)
        )

    def test_no_duplicate_pages_or_components(self, resolver: PageSetResolver, catalog):
        everything = [s.id for s in catalog.selectable()]
        resolved = resolver.resolve((CORE_FEATURE_ID,), everything)
        assert len(resolved.pages) == len(set(resolved.pages))
        assert len(resolved.components) == len(set(resolved.components))
        assert len(resolved.style_bundles) == len(set(resolved.style_bundles))

    def test_monotonic(self, resolver: PageSetResolver, catalog):
        base = set(resolver.resolve((CORE_FEATURE_ID,), ()).pages)
        for spec in catalog.selectable():
            assert base <= set(resolver.resolve((CORE_FEATURE_ID,), {spec.id}).pages)

    def test_shared_dependency_is_unioned(self, resolver: PageSetResolver):
        resolved = resolver.resolve((CORE_FEATURE_ID,), {"reviews", "blog"})
        names = [ref.name for ref in resolved.dependencies]
        assert names.count("dompurify") == 1
        assert resolved.dependency_conflicts == ()


class TestTieBreak:
    def test_first_feature_wins_gallery_page(self, resolver: PageSetResolver):
        resolved = resolver.resolve((CORE_FEATURE_ID,), {"portfolio", "gallery"})
        assert resolved.page_owners["gallery"] == "gallery"
        assert resolved.page_components["gallery"] == ("Gallery",)
        assert resolved.page_styles["gallery"] == ("gallery",)
        assert resolved.page_owners["portfolio"] == "portfolio"

    def test_portfolio_alone_owns_gallery(self, resolver: PageSetResolver):
        resolved = resolver.resolve((CORE_FEATURE_ID,), {"portfolio"})
        assert resolved.pages == ("home", "about", "services", "portfolio", "gallery")
        assert resolved.page_owners["gallery"] == "portfolio"
        assert resolved.page_components["gallery"] == ("ProjectShowcase",)

    def test_dependency_conflict_keeps_first_version(self):
        custom = FeatureCatalog(
            [
                FeatureSpec(id="core", pages=("home",)),
                FeatureSpec(id="first", dependencies=["lib@^1.0.0"]),
                FeatureSpec(id="second", dependencies=["lib@^2.0.0"]),
            ]
        )
        resolved = PageSetResolver(custom).resolve(("core",), {"second", "first"})
        assert resolved.dependency_map() == {"lib": "^1.0.0"}
        assert len(resolved.dependency_conflicts) == 1
        assert "second" in resolved.dependency_conflicts[0]


class TestExpandPages:
    def test_authentication_group_completed(self):
        spec = FeatureSpec(id="partial-auth", functionality="authentication", pages=("login",))
        assert expand_pages(spec) == ("login", "register", "profile")

    def test_plain_feature_unchanged(self):
        spec = FeatureSpec(id="x", pages=("a", "b", "a"))
        assert expand_pages(spec) == ("a", "b")
