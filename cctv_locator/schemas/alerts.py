# cctv_locator/schemas/alerts.py
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Any, Literal, Optional

from .common import CameraFeed, Coordinate, MediaReference


class Alert(BaseModel):
    """Alert record as returned by the upstream fetch-alerts endpoint."""
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(..., alias="_id")
    anomaly_time: Optional[str] = Field(None, alias="anomalyTime")
    coordinates: Any = None
    location: Optional[str] = None
    type: Optional[str] = None
    severity: Optional[str] = None
    footage_url: Any = Field(None, alias="footageUrl")
    pinata_url: Any = Field(None, alias="pinataUrl")
    firebase_url: Any = Field(None, alias="firebaseUrl")

    def media_reference(self) -> MediaReference:
        return MediaReference(
            primary_url=self.firebase_url,
            legacy_url=self.pinata_url,
            raw_reference=self.footage_url,
        )


class AlertView(BaseModel):
    alert: Alert
    coordinate: Optional[Coordinate] = None
    video_url: Optional[str] = None
    video_source: Optional[str] = None


# -------- requests --------
class LocateRequest(BaseModel):
    coordinates: Any = None

class NearestCctvRequest(BaseModel):
    coordinates: Any = None
    # dashboard sends either "locality" or the alert's "location"
    locality: Optional[str] = Field(None, validation_alias=AliasChoices("locality", "location"))
    k: Optional[int] = Field(None, ge=1)


# -------- responses --------
class LocateResponse(BaseModel):
    status: Literal["ok", "coordinates_unavailable"]
    coordinate: Optional[Coordinate] = None
    map_url: Optional[str] = None
    message: Optional[str] = None

class NearestCctvResponse(BaseModel):
    status: Literal["ok", "coordinates_unavailable", "locality_unavailable"]
    locality: Optional[str] = None
    origin: Optional[Coordinate] = None
    cameras: list[CameraFeed] = []
    message: Optional[str] = None

class FootageResponse(BaseModel):
    status: Literal["ok", "footage_unavailable"]
    url: Optional[str] = None
    source: Optional[str] = None
    message: Optional[str] = None
