"""
Tests for the onboarding configuration replace/create/read flows
"""
import asyncio

import pytest

from app.core.exceptions import EmptyPageError, InvalidComponentNameError, PersistenceError
from app.onboarding.service import OnboardingConfigService
from conftest import make_components

TABLE = "onboarding_config"


@pytest.fixture
def service(store):
    return OnboardingConfigService(store=store, table=TABLE)


def seed(store, *pairs):
    store.tables[TABLE] = [
        {"id": f"old-{i}", "component_name": name, "page_number": page}
        for i, (name, page) in enumerate(pairs)
    ]


def placements(rows):
    return [(r["component_name"], r["page_number"]) for r in rows]


@pytest.mark.asyncio
async def test_replace_swaps_whole_configuration(service, store, valid_components):
    """Test that replace deletes the old rows and inserts the new set"""
    seed(store, ("birthdate", 2), ("about_me", 3))

    rows = await service.replace(valid_components)

    assert placements(rows) == [("about_me", 2), ("address", 2), ("birthdate", 3)]
    assert store.rows(TABLE) == rows
    assert store.calls == [("delete", TABLE), ("insert", TABLE)]


@pytest.mark.asyncio
async def test_replace_returns_store_rows_with_generated_fields(service, valid_components):
    """Test that replace returns the rows as stored, not the caller's input"""
    rows = await service.replace(valid_components)

    assert all("id" in r and "created_at" in r for r in rows)


@pytest.mark.asyncio
async def test_replace_with_invalid_input_writes_nothing(service, store):
    """Test that a failed validation leaves the table untouched"""
    seed(store, ("birthdate", 2), ("about_me", 3))
    before = list(store.rows(TABLE))

    with pytest.raises(EmptyPageError):
        await service.replace(make_components(("about_me", 2)))

    assert store.calls == []
    assert store.rows(TABLE) == before


@pytest.mark.asyncio
async def test_replace_reports_invalid_name_without_writing(service, store):
    """Test that an unknown component name is rejected before any store call"""
    components = make_components(("about_me", 2), ("address", 2), ("birthdate", 3), ("foo", 3))

    with pytest.raises(InvalidComponentNameError):
        await service.replace(components)

    assert store.calls == []


@pytest.mark.asyncio
async def test_failed_delete_skips_insert(service, store, valid_components):
    """Test that a failed delete stops the replace before inserting"""
    seed(store, ("birthdate", 2), ("about_me", 3))
    store.fail_on[("delete", TABLE)] = "permission denied for table onboarding_config"

    with pytest.raises(PersistenceError) as exc_info:
        await service.replace(valid_components)

    assert store.calls == [("delete", TABLE)]
    assert len(store.rows(TABLE)) == 2
    assert "permission denied" not in exc_info.value.message


@pytest.mark.asyncio
async def test_failed_insert_after_delete_leaves_table_empty(service, store, valid_components):
    """Test that the old configuration is not restored when the insert fails"""
    seed(store, ("birthdate", 2), ("about_me", 3))
    store.fail_on[("insert", TABLE)] = "duplicate key value violates unique constraint"

    with pytest.raises(PersistenceError):
        await service.replace(valid_components)

    assert store.calls == [("delete", TABLE), ("insert", TABLE)]
    assert store.rows(TABLE) == []


@pytest.mark.asyncio
async def test_create_inserts_without_deleting(service, store, valid_components):
    """Test that create appends rows and never clears the table"""
    seed(store, ("birthdate", 2))

    rows = await service.create(valid_components)

    assert len(rows) == 3
    assert len(store.rows(TABLE)) == 4
    assert ("delete", TABLE) not in store.calls


@pytest.mark.asyncio
async def test_create_validates_first(service, store):
    """Test that create runs the placement rules before writing"""
    with pytest.raises(EmptyPageError):
        await service.create(make_components(("about_me", 3)))

    assert store.calls == []


@pytest.mark.asyncio
async def test_find_all_orders_by_page(service, store):
    """Test that the configuration is read back ordered by page number"""
    seed(store, ("birthdate", 3), ("about_me", 2), ("address", 3))

    rows = await service.find_all()

    assert [r["page_number"] for r in rows] == [2, 3, 3]


@pytest.mark.asyncio
async def test_find_all_translates_store_failure(service, store):
    """Test that a failed read surfaces as PersistenceError"""
    store.fail_on[("select", TABLE)] = "connection reset"

    with pytest.raises(PersistenceError):
        await service.find_all()


@pytest.mark.asyncio
async def test_concurrent_replaces_interleave_without_locking(service, store):
    """Test that two concurrent replaces interleave and both inserts land"""
    seed(store, ("birthdate", 2), ("about_me", 3))
    first = make_components(("about_me", 2), ("birthdate", 3))
    second = make_components(("address", 2), ("about_me", 3))

    await asyncio.gather(service.replace(first), service.replace(second))

    assert store.calls == [
        ("delete", TABLE), ("delete", TABLE), ("insert", TABLE), ("insert", TABLE)
    ]
    # Both deletes ran before either insert, so the table holds both sets
    assert placements(store.rows(TABLE)) == [
        ("about_me", 2), ("birthdate", 3), ("address", 2), ("about_me", 3)
    ]
