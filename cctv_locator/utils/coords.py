"""
Coordinate parsing for alert records.

Alerts carry their location either as a "lat,lng" string (older records) or
as a {"lat": .., "lng": ..} object (newer records). Both shapes are lifted
into a tagged union first, then each branch extracts two candidates that must
be finite, in-range numbers. Anything else comes back as InvalidCoordinate:
a bad coordinate is never defaulted to (0, 0).
"""
from collections.abc import Mapping
import math
import re
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from ..schemas.common import Coordinate, InvalidCoordinate

_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class DelimitedInput(BaseModel):
    kind: Literal["delimited"] = "delimited"
    text: str

    @model_validator(mode="before")
    @classmethod
    def _wrap_text(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"text": data}
        return data


class StructuredInput(BaseModel):
    kind: Literal["structured"] = "structured"
    lat: Any = Field(validation_alias=AliasChoices("lat", "latitude"))
    lng: Any = Field(validation_alias=AliasChoices("lng", "lon", "longitude"))

    @model_validator(mode="before")
    @classmethod
    def _as_dict(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return dict(data)
        return data


def _shape(raw: Any) -> str | None:
    if isinstance(raw, (DelimitedInput, StructuredInput)):
        return raw.kind
    if isinstance(raw, str):
        return "delimited"
    if isinstance(raw, Mapping):
        return "structured"
    return None


CoordinateInput = Annotated[
    Union[
        Annotated[DelimitedInput, Tag("delimited")],
        Annotated[StructuredInput, Tag("structured")],
    ],
    Discriminator(_shape),
]

_input_adapter = TypeAdapter(CoordinateInput)


def _finite(value: Any) -> float | None:
    """Return value as a finite float, or None. Booleans are not numbers here."""
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            f = float(value)
        elif isinstance(value, str) and _NUMBER.fullmatch(value.strip()):
            f = float(value.strip())
        else:
            return None
    except OverflowError:
        return None
    return f if math.isfinite(f) else None


def parse_coordinates(raw: Any) -> Coordinate | InvalidCoordinate:
    if isinstance(raw, Coordinate):
        return raw
    if raw is None:
        return InvalidCoordinate("coordinates missing")

    try:
        shape = _input_adapter.validate_python(raw)
    except ValidationError:
        return InvalidCoordinate(f"unrecognised coordinate shape: {type(raw).__name__}")

    if isinstance(shape, DelimitedInput):
        parts = shape.text.split(",")
        if len(parts) != 2:
            return InvalidCoordinate(f"expected 'lat,lng', got {shape.text!r}")
        lat_raw, lng_raw = parts
    else:
        lat_raw, lng_raw = shape.lat, shape.lng

    lat, lng = _finite(lat_raw), _finite(lng_raw)
    if lat is None or lng is None:
        return InvalidCoordinate(f"non-numeric coordinate component: {lat_raw!r}, {lng_raw!r}")
    if not -90.0 <= lat <= 90.0:
        return InvalidCoordinate(f"latitude out of range: {lat}")
    if not -180.0 <= lng <= 180.0:
        return InvalidCoordinate(f"longitude out of range: {lng}")
    return Coordinate(lat=lat, lng=lng)
