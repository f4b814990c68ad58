"""Tests for FilterCatalogUseCase and the category mapping cache."""

from __future__ import annotations

import pytest

from app.application.category_mapping import CategoryMapping, CategoryMappingCache
from app.application.use_cases.filter_catalog import FilterCatalogUseCase
from app.domain.value_objects.enums import RecordKind
from app.domain.value_objects.filters import BranchName, ColumnId

TABLES = ["ob", "data_01_30"]


@pytest.fixture
def catalog(source, inspections, category_cache):
    source.routes = {"ob": ["5", "12"], "data_01_30": ["12", "7"]}
    source.categories = {"ob": ["Опоздание"], "data_01_30": ["Хамство водителя"]}
    inspections.routes = ["12", "40"]
    return FilterCatalogUseCase(
        source_repo=source,
        inspection_repo=inspections,
        category_cache=category_cache,
        source_tables=TABLES,
    )


@pytest.mark.asyncio
async def test_branches_sorted_unique(catalog):
    assert await catalog.branches() == ["Витебский", "Горская", "Зеленогорск"]


@pytest.mark.asyncio
async def test_routes_by_kind(catalog):
    assert await catalog.routes([RecordKind.COMPLAINT]) == ["12", "5", "7"]
    assert await catalog.routes([RecordKind.INSPECTION]) == ["12", "40"]
    assert await catalog.routes() == ["12", "40", "5", "7"]


@pytest.mark.asyncio
async def test_routes_skip_failing_inspections(catalog, inspections):
    inspections.fail = True
    assert await catalog.routes() == ["12", "5", "7"]


@pytest.mark.asyncio
async def test_routes_by_columns_uses_latest_distribution(catalog, source):
    source.distribution = {1: ["5", "12"], 2: ["3"], 4: ["40"]}
    routes = await catalog.routes_by_columns([BranchName("Витебский")])
    assert routes == ["12", "3", "5"]


@pytest.mark.asyncio
async def test_routes_by_columns_without_distribution(catalog, source):
    source.distribution = None
    assert await catalog.routes_by_columns([ColumnId(1)]) == ["12", "5", "7"]


@pytest.mark.asyncio
async def test_routes_by_columns_without_columns(catalog):
    assert await catalog.routes_by_columns([]) == ["12", "5", "7"]


@pytest.mark.asyncio
async def test_routes_by_unknown_branch_is_empty(catalog, source):
    source.distribution = {1: ["5"]}
    assert await catalog.routes_by_columns([BranchName("Несуществующая")]) == []


@pytest.mark.asyncio
async def test_categories_combine_tables_and_mapping(catalog):
    assert await catalog.categories() == [
        "Грязь в салоне",
        "Опоздание",
        "Хамство водителя",
    ]
    assert await catalog.categories([RecordKind.INSPECTION]) == ["Грязь в салоне", "Опоздание"]


@pytest.mark.asyncio
async def test_unknown_table_ignored_in_catalogue(catalog):
    assert await catalog.complaint_routes(["ob", "missing"]) == ["12", "5"]


# ─── Category mapping ───────────────────────────────────────────────


def test_mapping_category_owns_several_codes():
    mapping = CategoryMapping([("V01", "Опоздание"), ("V02", "Опоздание"), ("V10", "Грязь")])
    assert mapping.codes_for(["Опоздание"]) == frozenset({"V01", "V02"})
    assert mapping.category_for("V10") == "Грязь"
    assert mapping.category_for("X") is None
    assert mapping.category_for(None) is None
    assert mapping.categories() == ["Грязь", "Опоздание"]


def test_mapping_skips_incomplete_pairs():
    mapping = CategoryMapping([("V01", ""), ("", "Грязь"), ("V02", "Опоздание")])
    assert len(mapping) == 1


@pytest.mark.asyncio
async def test_cache_invalidate_reloads(source):
    cache = CategoryMappingCache()
    assert not cache.is_loaded
    await cache.get(source)
    await cache.get(source)
    assert source.mapping_calls == 1

    cache.invalidate()
    source.mapping.append(("V20", "Курение в салоне"))
    mapping = await cache.get(source)

    assert source.mapping_calls == 2
    assert mapping.category_for("V20") == "Курение в салоне"
