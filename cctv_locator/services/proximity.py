from collections.abc import Sequence
import operator

import numpy as np

from ..schemas.common import Coordinate, Locality, RankedLocality
from ..utils.geo import haversine_km_many


def nearest(origin: Coordinate, catalog: Sequence[Locality], k: int) -> list[RankedLocality]:
    """
    Rank catalog localities by haversine distance from origin and keep the first k.

    Equal distances keep catalog order (stable sort), so duplicates and exact
    ties rank the same way on every call. k larger than the catalog returns the
    whole catalog ranked; an empty catalog returns [].
    """
    if isinstance(k, bool):
        raise ValueError(f"k must be a positive integer, got {k!r}")
    try:
        k = operator.index(k)
    except TypeError:
        raise ValueError(f"k must be a positive integer, got {k!r}") from None
    if k < 1:
        raise ValueError(f"k must be a positive integer, got {k!r}")
    if not catalog:
        return []

    lats = np.array([loc.coordinate.lat for loc in catalog], dtype=float)
    lons = np.array([loc.coordinate.lng for loc in catalog], dtype=float)
    dist = haversine_km_many(origin.lat, origin.lng, lats, lons)
    order = np.argsort(dist, kind="stable")[:k]

    return [
        RankedLocality(
            name=catalog[i].name,
            coordinate=catalog[i].coordinate,
            distance_km=float(dist[i]),
        )
        for i in order
    ]
