from ..schemas.common import Coordinate

MAPS_BASE = "https://www.google.com/maps"


def map_embed_url(coord: Coordinate, zoom: int = 15) -> str:
    return f"{MAPS_BASE}?q={coord.lat},{coord.lng}&z={zoom}&output=embed"
