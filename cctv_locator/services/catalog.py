"""
Static locality catalog (one CCTV site per locality).

File format, same as the dashboard's constants:
    [{"locality": "Koramangala", "coordinates": [12.9352, 77.6245]}, ...]
"""
from functools import lru_cache
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..core.config import settings
from ..schemas.common import Coordinate, Locality


class CatalogError(ValueError):
    pass


class CatalogEntry(BaseModel):
    locality: str
    coordinates: tuple[float, float]


_entries_adapter = TypeAdapter(list[CatalogEntry])


def _first_error(e: ValidationError) -> tuple[Any, str]:
    err = e.errors()[0]
    loc = err.get("loc") or ()
    return (loc[0] if loc else None), err.get("msg", "")


def parse_catalog(entries: Any) -> tuple[Locality, ...]:
    try:
        rows = _entries_adapter.validate_python(entries)
    except ValidationError as e:
        index, msg = _first_error(e)
        if index is None:
            raise CatalogError(f"catalog must be a JSON list: {msg}") from e
        raise CatalogError(f"bad catalog entry #{index}: {msg}") from e

    out: list[Locality] = []
    seen: set[str] = set()
    for i, row in enumerate(rows):
        lat, lng = row.coordinates
        try:
            loc = Locality(name=row.locality, coordinate=Coordinate(lat=lat, lng=lng))
        except ValidationError as e:
            raise CatalogError(f"bad catalog entry #{i}: {_first_error(e)[1]}") from e
        if loc.name in seen:
            raise CatalogError(f"duplicate locality name: {loc.name!r}")
        seen.add(loc.name)
        out.append(loc)
    return tuple(out)


def load_catalog(path: str | Path) -> tuple[Locality, ...]:
    p = Path(path)
    try:
        entries = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise CatalogError(f"{p}: cannot read catalog ({e})") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"{p}: invalid JSON ({e})") from e
    return parse_catalog(entries)


@lru_cache(maxsize=4)
def _cached(path: str) -> tuple[Locality, ...]:
    return load_catalog(path)


def default_catalog() -> tuple[Locality, ...]:
    return _cached(settings.localities_path)
