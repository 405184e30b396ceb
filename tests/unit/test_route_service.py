"""
Unit tests for route calculation, details and personalized tours
"""
import pytest

from museum_nav.config.settings import NavigationSettings
from museum_nav.core import geo
from museum_nav.core.exceptions import NotFoundError, ValidationError
from museum_nav.repositories import InMemoryRepository
from museum_nav.services import DestinationService, RouteService
from museum_nav.services.mock_data import mock_destinations

ENTRANCE = (40.7610, -73.9780)


@pytest.mark.asyncio
async def test_calculate_route_persists_full_record(route_service):
    summary = await route_service.calculate_route(1, 2, *ENTRANCE)

    assert summary["route_id"] == 1
    assert summary["user_id"] == 1
    assert summary["destination_id"] == 2
    assert summary["calculationTime"] >= 0

    stored = await route_service.routes.find_by_id(1)
    expected = geo.calculate_distance(*ENTRANCE, 40.7614, -73.9776)
    assert stored["distance"] == pytest.approx(round(expected, 1))
    assert stored["is_personalized"] is False
    assert stored["stops"] == []
    assert len(stored["path"]) == 4
    assert stored["end_coordinates"] == {"lat": 40.7614, "lng": -73.9776}


@pytest.mark.asyncio
async def test_calculate_route_unknown_destination(route_service):
    with pytest.raises(NotFoundError) as exc:
        await route_service.calculate_route(1, 999, *ENTRANCE)
    assert exc.value.message == "Destination not found"


@pytest.mark.asyncio
async def test_route_ids_increase(route_service):
    first = await route_service.calculate_route(1, 2, *ENTRANCE)
    second = await route_service.calculate_route(1, 3, *ENTRANCE)
    assert second["route_id"] == first["route_id"] + 1


@pytest.mark.asyncio
async def test_route_details_view(route_service):
    await route_service.calculate_route(1, 2, *ENTRANCE)

    details = await route_service.get_route_details(1)

    assert details["route_id"] == 1
    assert details["path"][0] == "40.761,-73.978"
    assert details["path"][-1] == "40.7614,-73.9776"
    assert details["instructions"][0] == "Start from your current location"
    assert details["instructions"][-1] == "You have arrived at your destination"
    assert details["estimatedTime"] > 0
    assert details["isPersonalized"] is False


@pytest.mark.asyncio
async def test_route_details_walking_speed_override(route_service):
    await route_service.calculate_route(1, 7, *ENTRANCE)
    base = await route_service.get_route_details(1)

    faster = await route_service.get_route_details(1, walking_speed=10)

    assert faster["estimatedTime"] == geo.calculate_estimated_time(base["distance"], 10)
    assert faster["estimatedTime"] < base["estimatedTime"]
    with pytest.raises(ValidationError):
        await route_service.get_route_details(1, walking_speed=0)


@pytest.mark.asyncio
async def test_route_details_missing(route_service):
    assert await route_service.get_route_details(42) is None


@pytest.mark.asyncio
async def test_update_stops_adds_penalty_and_persists(route_service):
    await route_service.calculate_route(1, 2, *ENTRANCE)
    before = (await route_service.get_route_details(1))["estimatedTime"]

    result = await route_service.update_route_stops(1, {"addStops": [4, 5]})

    assert result == {
        "route_id": 1,
        "stopsUpdated": True,
        "newEstimatedTime": before + 240,
        "stops": [4, 5],
    }
    details = await route_service.get_route_details(1)
    assert details["estimatedTime"] == before + 240
    assert details["stops"] == [4, 5]


@pytest.mark.asyncio
async def test_update_stops_without_stops_keeps_estimate(route_service):
    await route_service.calculate_route(1, 2, *ENTRANCE)
    before = (await route_service.get_route_details(1))["estimatedTime"]

    result = await route_service.update_route_stops(1, {})

    assert result["newEstimatedTime"] == before
    assert await route_service.update_route_stops(99, {"addStops": [1]}) is None
    with pytest.raises(ValidationError):
        await route_service.update_route_stops(1, {"addStops": "cafe"})


@pytest.mark.asyncio
async def test_recalculate_reports_stored_route(route_service):
    await route_service.calculate_route(2, 3, *ENTRANCE)

    result = await route_service.recalculate_route(1)

    assert result["route_id"] == 1
    assert result["user_id"] == 2
    assert result["destination_id"] == 3
    assert await route_service.recalculate_route(5) is None


@pytest.mark.asyncio
async def test_owner_and_delete(route_service):
    await route_service.calculate_route(2, 3, *ENTRANCE)

    assert await route_service.get_route_owner(1) == 2
    assert await route_service.delete_route(1) is True
    assert await route_service.delete_route(1) is False
    assert await route_service.get_route_owner(1) is None


@pytest.mark.asyncio
async def test_personalized_route_matches_preferences(route_service):
    result = await route_service.generate_personalized_route(1)

    # modern art, ancient greece, sculpture
    assert result["exhibits"] == [1, 2, 3, 5]
    assert result["estimated_duration"] == "40 minutes"
    assert result["map_url"] == "/maps/1/personalized_route.png"
    assert result["starting_point"] == {"lat": 40.7614, "lng": -73.9776}
    assert result["ending_point"] == {"lat": 40.7618, "lng": -73.9772}

    stored = await route_service.routes.find_by_id(result["route_id"])
    assert stored["is_personalized"] is True
    assert stored["user_id"] == 1


@pytest.mark.asyncio
async def test_personalized_route_matching_is_substring_and_case_insensitive(route_service, user_service):
    await user_service.update_preferences(2, ["IMPRESSIONISM"])

    result = await route_service.generate_personalized_route(2)

    assert result["exhibits"] == [1]
    assert result["estimated_duration"] == "10 minutes"


@pytest.mark.asyncio
async def test_personalized_route_is_capped(exhibit_service, user_service):
    service = RouteService(
        InMemoryRepository(),
        DestinationService(InMemoryRepository(mock_destinations())),
        exhibit_service,
        user_service,
        config=NavigationSettings(personalized_max_exhibits=2),
    )

    result = await service.generate_personalized_route(1)

    assert result["exhibits"] == [1, 2]
    assert result["estimated_duration"] == "20 minutes"


@pytest.mark.asyncio
async def test_personalized_route_failures(route_service, user_service):
    with pytest.raises(NotFoundError) as exc:
        await route_service.generate_personalized_route(99)
    assert exc.value.message == "User not found"

    with pytest.raises(NotFoundError) as exc:
        await route_service.generate_personalized_route(3)
    assert exc.value.message == "No matching exhibits found for user preferences"

    await user_service.update_preferences(1, [])
    with pytest.raises(ValidationError) as exc:
        await route_service.generate_personalized_route(1)
    assert exc.value.message == "Cannot generate personalized route - missing user preferences"
