"""
Unit tests for offline operation replay
"""
import pytest

from museum_nav.services import SyncService


class ExplodingCollaborator:
    def __getattr__(self, name):
        raise AssertionError(f"unexpected call to {name}")


@pytest.mark.asyncio
async def test_empty_batch_dispatches_nothing():
    service = SyncService(ExplodingCollaborator(), ExplodingCollaborator())

    result = await service.synchronize(1, [])

    assert result == {
        "conflicts": [],
        "successful": 0,
        "failed": 0,
        "details": {"successful": [], "failed": []},
    }


@pytest.mark.asyncio
async def test_mixed_batch_continues_after_failure(sync_service, exhibit_service, user_service):
    operations = [
        {"operation_type": "rating", "exhibit_id": 3, "rating": 4},
        {"operation_type": "teleport", "exhibit_id": 3},
        {"operation_type": "add_favorite", "exhibit_id": 2},
    ]

    result = await sync_service.synchronize(1, operations)

    assert result["successful"] == 2
    assert result["failed"] == 1
    assert result["conflicts"] == []
    assert result["details"]["successful"] == [operations[0], operations[2]]
    assert result["details"]["failed"] == [{"operation": operations[1], "reason": "Unknown operation type"}]

    exhibit = await exhibit_service.get_by_id(3)
    assert exhibit["ratings"] == {"1": 4}
    assert exhibit["average_rating"] == 4
    assert (await user_service.get_by_id(1))["favourites"] == [2]


@pytest.mark.asyncio
async def test_rating_recomputes_average(sync_service, exhibit_service):
    # exhibit 1 starts with two ratings of 5
    await sync_service.synchronize(3, [{"operation_type": "rating", "exhibit_id": 1, "rating": 3}])

    exhibit = await exhibit_service.get_by_id(1)
    assert exhibit["average_rating"] == pytest.approx(4.3)


@pytest.mark.asyncio
async def test_per_item_failures_are_reported(sync_service):
    operations = [
        {"operation_type": "rating", "exhibit_id": 99, "rating": 4},
        {"operation_type": "rating", "exhibit_id": 1, "rating": 7},
        {"operation_type": "add_favorite", "exhibit_id": 99},
        "rating",
    ]

    result = await sync_service.synchronize(1, operations)

    reasons = [item["reason"] for item in result["details"]["failed"]]
    assert result["successful"] == 0
    assert reasons[0] == "Exhibit not found"
    assert reasons[1].startswith("Invalid rating")
    assert reasons[2] == "Exhibit not found"
    assert reasons[3] == "Unknown operation type"


@pytest.mark.asyncio
async def test_anonymous_user_operations_fail(sync_service):
    result = await sync_service.synchronize(None, [
        {"operation_type": "add_favorite", "exhibit_id": 1},
        {"operation_type": "rating", "exhibit_id": 1, "rating": 5},
    ])

    assert result["failed"] == 2
    assert {item["reason"] for item in result["details"]["failed"]} == {"User not found"}


@pytest.mark.asyncio
async def test_favorites_add_is_idempotent_and_remove(sync_service, user_service):
    await sync_service.synchronize(2, [
        {"operation_type": "add_favorite", "exhibit_id": 4},
        {"operation_type": "add_favorite", "exhibit_id": 4},
        {"operation_type": "add_favorite", "exhibit_id": 5},
        {"operation_type": "remove_favorite", "exhibit_id": 4},
    ])

    assert (await user_service.get_by_id(2))["favourites"] == [5]


@pytest.mark.asyncio
async def test_unknown_user_fails_favorites(sync_service):
    result = await sync_service.synchronize(77, [{"operation_type": "remove_favorite", "exhibit_id": 1}])

    assert result["details"]["failed"][0]["reason"] == "User not found"
