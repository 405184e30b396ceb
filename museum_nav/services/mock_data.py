"""
Seed records for mock mode.

Exhibits, destinations and demo users mirror the data set the mobile client
is developed against. User passwords are hashed at seed time.
"""
from datetime import datetime, timezone
from typing import List

from museum_nav.core.security import hash_password
from museum_nav.repositories.base import Record

SEEDED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _exhibit(exhibit_id, name, title, artist, category, location, lat, lng, status="open", ratings=None):
    ratings = ratings or {}
    average = round(sum(ratings.values()) / len(ratings), 1) if ratings else 0
    return {
        "id": exhibit_id,
        "name": name,
        "title": title,
        "artist": artist,
        "category": category,
        "description": None,
        "location": location,
        "coordinates": {"lat": lat, "lng": lng},
        "status": status,
        "ratings": {str(k): v for k, v in ratings.items()},
        "average_rating": average,
        "created_at": SEEDED_AT,
        "updated_at": SEEDED_AT,
    }


def _destination(destination_id, name, dest_type, lat, lng, map_id=1, status="available", crowd_level="medium"):
    return {
        "id": destination_id,
        "name": name,
        "type": dest_type,
        "coordinates": {"lat": lat, "lng": lng},
        "map_id": map_id,
        "status": status,
        "crowd_level": crowd_level,
    }


def mock_exhibits() -> List[Record]:
    return [
        _exhibit(1, "The Starry Night", "The Starry Night", "Vincent van Gogh",
                 ["paintings", "post-impressionism", "modern art"], "Gallery A, Room 101",
                 40.7614, -73.9776, ratings={1: 5, 2: 5}),
        _exhibit(2, "Greek Amphora", "Ancient Greek Amphora", "Unknown",
                 ["pottery", "ancient greece", "archaeology"], "Gallery B, Room 205",
                 40.7615, -73.9775, ratings={2: 4}),
        _exhibit(3, "Renaissance Sculpture", "David - Renaissance Masterpiece", "Michelangelo",
                 ["sculpture", "renaissance", "marble"], "Gallery C, Room 301",
                 40.7616, -73.9774),
        _exhibit(4, "Egyptian Sarcophagus", "Pharaoh's Sarcophagus", "Unknown",
                 ["ancient egypt", "archaeology", "artifacts"], "Gallery D, Room 150",
                 40.7617, -73.9773),
        _exhibit(5, "Modern Abstract Art", "Composition VIII", "Wassily Kandinsky",
                 ["modern art", "abstract", "paintings"], "Gallery E, Room 401",
                 40.7618, -73.9772, status="closed"),
    ]


def mock_destinations() -> List[Record]:
    return [
        _destination(1, "Main Entrance", "entrance", 40.7610, -73.9780),
        _destination(2, "Gallery A - Modern Art", "exhibit", 40.7614, -73.9776, crowd_level="high"),
        _destination(3, "Gallery B - Ancient Greece", "exhibit", 40.7615, -73.9775, crowd_level="low"),
        _destination(4, "Restroom - Ground Floor", "restroom", 40.7612, -73.9778, crowd_level="low"),
        _destination(5, "Museum Cafe", "cafe", 40.7613, -73.9777),
        _destination(6, "Gallery C - Renaissance", "exhibit", 40.7616, -73.9774, map_id=2),
        _destination(7, "Gallery D - Temporarily Closed", "exhibit", 40.7617, -73.9773,
                     status="closed", crowd_level="none"),
    ]


def mock_users(password: str, bcrypt_rounds: int = 10) -> List[Record]:
    """Demo accounts; all share one password so the seed stays predictable."""
    hashed = hash_password(password, rounds=bcrypt_rounds)
    users = [
        (1, "john_smith", "john.smith@example.com", ["modern art", "ancient greece", "sculpture"]),
        (2, "maria_garcia", "maria.garcia@example.com", ["impressionism", "renaissance", "paintings"]),
        # no exhibit matches these categories
        (3, "chen_wei", "chen.wei@example.com", ["asian art", "ceramics", "calligraphy"]),
    ]
    return [
        {
            "id": user_id,
            "username": username,
            "email": email,
            "hashed_password": hashed,
            "role": "admin",
            "preferences": preferences,
            "favourites": [],
            "personalization_available": True,
            "created_at": SEEDED_AT,
            "updated_at": SEEDED_AT,
        }
        for user_id, username, email, preferences in users
    ]
