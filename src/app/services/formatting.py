from __future__ import annotations

from src.domain.models import ReferencePoint


def format_distance(distance_km: float | None) -> str:
    """'850 m' below one kilometre, '1.2 km' above; an em dash when unknown."""

    if distance_km is None:
        return "—"
    if distance_km < 1.0:
        return f"{round(distance_km * 1000)} m"
    return f"{distance_km:.1f} km"


def format_location(ref: ReferencePoint | None) -> str:
    if ref is None:
        return "Location unavailable"
    text = f"{ref.lat:.4f}, {ref.lon:.4f}"
    if ref.accuracy_m is not None:
        text += f" (±{round(ref.accuracy_m)} m)"
    return text
