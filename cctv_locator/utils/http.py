# cctv_locator/utils/http.py
import httpx
from typing import Any, Optional

async def get_json(url: str, headers: Optional[dict] = None, timeout: float = 30.0,
                   transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        r = await client.get(url, headers=headers)
        r.raise_for_status()
        return r.json()

async def delete(url: str, headers: Optional[dict] = None, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        r = await client.delete(url, headers=headers)
        r.raise_for_status()
        return r.status_code
