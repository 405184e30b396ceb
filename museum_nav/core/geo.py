"""Geographic helpers for route calculation and deviation detection.

Paths are straight-line interpolations between two points; nothing here
knows about walls, floors or corridors.
"""
import math
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

EARTH_RADIUS_M = 6371000
PATH_STEPS = 3

Point = Dict[str, float]


def round_half_up(value: float, ndigits: int = 0):
    """Round halves away from zero for positives (2.5 -> 3), unlike round()."""
    if ndigits:
        factor = 10 ** ndigits
        return math.floor(value * factor + 0.5) / factor
    return int(math.floor(value + 0.5))


def calculate_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in meters (Haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi, dlam = math.radians(lat2 - lat1), math.radians(lng2 - lng1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def calculate_estimated_time(distance: float, walking_speed: float = 5.0) -> int:
    """
    Walking time in seconds for a distance in meters.

    Args:
        distance: Distance in meters
        walking_speed: Speed in km/h, must be positive

    Raises:
        ValueError: If walking_speed is not positive
    """
    if walking_speed <= 0:
        raise ValueError("walking_speed must be positive")
    speed_mps = walking_speed * 1000 / 3600
    return round_half_up(distance / speed_mps)


def calculate_arrival_time(estimated_seconds: float, now: Optional[datetime] = None) -> str:
    """Wall-clock arrival time formatted as e.g. ``03:25 PM``."""
    start = now or datetime.now()
    return (start + timedelta(seconds=estimated_seconds)).strftime("%I:%M %p")


def generate_path(start: Point, end: Point) -> List[Point]:
    """Linear interpolation from start to end, both inclusive."""
    path = [{"lat": start["lat"], "lng": start["lng"]}]
    for i in range(1, PATH_STEPS):
        ratio = i / PATH_STEPS
        path.append({
            "lat": start["lat"] + (end["lat"] - start["lat"]) * ratio,
            "lng": start["lng"] + (end["lng"] - start["lng"]) * ratio,
        })
    path.append({"lat": end["lat"], "lng": end["lng"]})
    return path


def generate_instructions(distance: float) -> List[str]:
    instructions = ["Start from your current location"]
    if distance > 100:
        instructions.append(f"Walk straight for {round_half_up(distance / 2)} meters")
        instructions.append("Continue following the path")
    else:
        instructions.append(f"Walk {round_half_up(distance)} meters to your destination")
    instructions.append("You have arrived at your destination")
    return instructions


def is_route_deviated(current: Point, path: Sequence[Point], threshold: float = 50) -> bool:
    """True when the nearest path point is farther than ``threshold`` meters."""
    if not path:
        return False
    nearest = min(
        calculate_distance(current["lat"], current["lng"], p["lat"], p["lng"])
        for p in path
    )
    return nearest > threshold


def format_path_point(point: Point) -> str:
    return f"{point['lat']},{point['lng']}"


def parse_path_point(value: str) -> Point:
    lat, lng = value.split(",")
    return {"lat": float(lat), "lng": float(lng)}
