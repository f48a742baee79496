from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Locality(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    coordinate: Coordinate


class RankedLocality(Locality):
    distance_km: float = Field(..., ge=0)


class CameraFeed(BaseModel):
    locality: RankedLocality
    feed_url: str | None = None


class MediaReference(BaseModel):
    """
    The three places a video pointer has lived over time:
      primary_url   -> direct cloud storage URL (firebaseUrl)
      legacy_url    -> pinned-storage gateway URL (pinataUrl)
      raw_reference -> full URL or bare content hash (footageUrl)
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    primary_url: str | None = Field(
        None, validation_alias=AliasChoices("primary_url", "primaryUrl", "firebaseUrl")
    )
    legacy_url: str | None = Field(
        None, validation_alias=AliasChoices("legacy_url", "legacyUrl", "pinataUrl")
    )
    raw_reference: str | None = Field(
        None, validation_alias=AliasChoices("raw_reference", "rawReference", "footageUrl")
    )

    @field_validator("primary_url", "legacy_url", "raw_reference", mode="before")
    @classmethod
    def _only_non_empty_strings(cls, v: Any) -> str | None:
        # older records carry nulls, numbers or "" in these slots
        if isinstance(v, str) and v:
            return v
        return None


@dataclass(frozen=True)
class InvalidCoordinate:
    reason: str

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Unavailable:
    reason: str = "no playable source"

    def __bool__(self) -> bool:
        return False
