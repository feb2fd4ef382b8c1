"""
End-to-end flows across query, mutation and saved-set services
"""

import pytest
from directory.mutations import ResourceMutationService
from directory.queries import ResourceQueryService
from directory.saved import SavedResourceService


@pytest.mark.asyncio
async def test_created_resource_is_listed_by_category_and_zipcode(repository, case_manager):
    created = await ResourceMutationService(repository).create_resource(
        {"organization": "Mission Food Hub", "category": "Food", "zipcode": "94103"},
        case_manager
    )
    
    page = await ResourceQueryService(repository).list_resources(
        {"category": "Food", "zipcode": "94103"}, 1
    )
    
    assert page.total_resources >= 1
    assert created.id in [r.id for r in page.resources]


@pytest.mark.asyncio
async def test_updated_resource_moves_to_front(repository, make_resource):
    older = await make_resource()
    await make_resource()
    
    await ResourceMutationService(repository).update_resource_details(older.id, {"status": "LIMITED"})
    page = await ResourceQueryService(repository).list_resources(None, 1)
    
    assert page.resources[0].id == older.id


@pytest.mark.asyncio
async def test_recent_updates_pick_up_edits(repository, make_resource):
    edited = await make_resource()
    untouched = await make_resource()
    
    updated = await ResourceMutationService(repository).update_resource_details(
        edited.id, {"contact_details": {"phone": "(415) 555-0100"}}
    )
    page = await ResourceQueryService(repository).list_recently_updated(updated.last_updated, 1)
    
    ids = [r.id for r in page.resources]
    assert edited.id in ids
    assert untouched.id not in ids


@pytest.mark.asyncio
async def test_save_unsave_round_trip(repository, make_resource, case_manager):
    keep = await make_resource()
    drop = await make_resource()
    saved = SavedResourceService(repository, case_manager)
    
    await saved.save(keep.id)
    await saved.save(drop.id)
    await saved.unsave(drop.id)
    await saved.unsave(drop.id)
    
    assert [r.id for r in await saved.list_saved()] == [keep.id]
