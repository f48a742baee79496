from fastapi import APIRouter, Depends

from ..schemas.common import Locality
from ..services.catalog import default_catalog

router = APIRouter(prefix="/localities", tags=["localities"])


@router.get("", response_model=list[Locality])
def list_localities(catalog: tuple[Locality, ...] = Depends(default_catalog)):
    return list(catalog)
