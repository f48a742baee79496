# cctv_locator/routers/alerts.py
import logging
from typing import List

import httpx
from fastapi import APIRouter, Depends, HTTPException

from ..core.config import settings
from ..schemas.alerts import (
    Alert,
    AlertView,
    FootageResponse,
    LocateRequest,
    LocateResponse,
    NearestCctvRequest,
    NearestCctvResponse,
)
from ..schemas.common import InvalidCoordinate, Locality, MediaReference, Unavailable
from ..services.alerts_api import AlertsClient, UpstreamPayloadError, get_alerts_client
from ..services.catalog import default_catalog
from ..services.feeds import attach_feeds
from ..services.maps import map_embed_url
from ..services.media import MediaSourceResolver
from ..services.proximity import nearest
from ..utils.coords import parse_coordinates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/alerts", tags=["alerts"])

COORDS_UNAVAILABLE = "Coordinates not available for this alert"
FOOTAGE_UNAVAILABLE = "Footage URL is not available"
LOCALITY_UNAVAILABLE = "Missing locality/location data"


def get_resolver() -> MediaSourceResolver:
    return MediaSourceResolver(gateway=settings.ipfs_gateway_base)


def _upstream_error(e: Exception) -> HTTPException:
    if isinstance(e, httpx.HTTPStatusError):
        return HTTPException(status_code=502, detail=f"Alert service returned {e.response.status_code}")
    if isinstance(e, UpstreamPayloadError):
        return HTTPException(status_code=502, detail=f"Alert service sent a bad payload: {e}")
    return HTTPException(status_code=502, detail=f"Alert service unreachable: {e}")


# =========================
# LIST / DELETE (proxied)
# =========================
@router.get("", response_model=List[AlertView])
async def list_alerts(
    client: AlertsClient = Depends(get_alerts_client),
    resolver: MediaSourceResolver = Depends(get_resolver),
):
    try:
        alerts = await client.fetch_alerts()
    except (httpx.HTTPError, UpstreamPayloadError) as e:
        logger.error("Fetching alerts failed: %s", e)
        raise _upstream_error(e) from e
    return [_view(a, resolver) for a in alerts]


@router.delete("/{alert_id}")
async def delete_alert(alert_id: str, client: AlertsClient = Depends(get_alerts_client)):
    try:
        ok = await client.delete_alert(alert_id)
    except httpx.HTTPError as e:
        logger.error("Deleting alert %s failed: %s", alert_id, e)
        raise _upstream_error(e) from e
    if not ok:
        raise HTTPException(status_code=404, detail="Failed to delete alert")
    return {"deleted": alert_id}


def _view(alert: Alert, resolver: MediaSourceResolver) -> AlertView:
    coord = parse_coordinates(alert.coordinates)
    hit = resolver.resolve_source(alert.media_reference())
    view = AlertView(alert=alert)
    if not isinstance(coord, InvalidCoordinate):
        view.coordinate = coord
    if not isinstance(hit, Unavailable):
        view.video_source, view.video_url = hit
    return view


# =========================
# LOCATE CRIME (map embed)
# =========================
@router.post("/locate", response_model=LocateResponse)
async def locate(q: LocateRequest):
    coord = parse_coordinates(q.coordinates)
    if isinstance(coord, InvalidCoordinate):
        logger.info("Locate rejected: %s", coord.reason)
        return LocateResponse(status="coordinates_unavailable", message=COORDS_UNAVAILABLE)
    return LocateResponse(status="ok", coordinate=coord, map_url=map_embed_url(coord, settings.map_zoom))


# =========================
# NEAREST CCTVs
# =========================
@router.post("/nearest-cctvs", response_model=NearestCctvResponse)
async def nearest_cctvs(q: NearestCctvRequest, catalog: tuple[Locality, ...] = Depends(default_catalog)):
    origin = parse_coordinates(q.coordinates)
    if isinstance(origin, InvalidCoordinate):
        logger.info("Nearest CCTV lookup rejected: %s", origin.reason)
        return NearestCctvResponse(status="coordinates_unavailable", locality=q.locality, message=COORDS_UNAVAILABLE)
    if not (q.locality or "").strip():
        logger.info("Nearest CCTV lookup rejected: missing locality")
        return NearestCctvResponse(status="locality_unavailable", origin=origin, message=LOCALITY_UNAVAILABLE)

    ranked = nearest(origin, catalog, q.k or settings.nearest_k)
    return NearestCctvResponse(
        status="ok",
        locality=q.locality,
        origin=origin,
        cameras=attach_feeds(ranked, settings.camera_feed_urls),
    )


# =========================
# INCIDENT FOOTAGE
# =========================
@router.post("/footage", response_model=FootageResponse)
async def footage(ref: MediaReference, resolver: MediaSourceResolver = Depends(get_resolver)):
    hit = resolver.resolve_source(ref)
    if isinstance(hit, Unavailable):
        logger.warning("No playable source: %s", ref.model_dump())
        return FootageResponse(status="footage_unavailable", message=FOOTAGE_UNAVAILABLE)
    source, url = hit
    logger.info("Footage resolved via %s: %s", source, url)
    return FootageResponse(status="ok", url=url, source=source)
