"""
Carbon Estimator - CO2 per page view and green hosting lookup.

Uses the Sustainable Web Design model v4 (per-byte). Hosting status comes from
the Green Web Foundation greencheck API.
"""
from typing import Optional

import httpx

from wsg_check.config import settings
from wsg_check.logger import logger

CO2_MODEL = "swd-v4"

BYTES_PER_GB = 1_000_000_000

# Energy intensity per segment in kWh/GB
OPERATIONAL_KWH_PER_GB = {"data_centre": 0.055, "network": 0.059, "device": 0.080}
EMBODIED_KWH_PER_GB = {"data_centre": 0.012, "network": 0.013, "device": 0.081}

# Carbon intensity in gCO2e/kWh
GLOBAL_GRID_INTENSITY = 494
RENEWABLE_GRID_INTENSITY = 50


def estimate_co2(byte_count: int, is_green_hosted: bool = False) -> float:
    """Grams of CO2e for transferring byte_count bytes once, rounded to 4 decimals."""
    if byte_count <= 0:
        return 0.0

    gigabytes = byte_count / BYTES_PER_GB
    total = 0.0
    for segment, kwh in OPERATIONAL_KWH_PER_GB.items():
        intensity = GLOBAL_GRID_INTENSITY
        if segment == "data_centre" and is_green_hosted:
            intensity = RENEWABLE_GRID_INTENSITY
        total += gigabytes * kwh * intensity
    for kwh in EMBODIED_KWH_PER_GB.values():
        total += gigabytes * kwh * GLOBAL_GRID_INTENSITY

    return round(total, 4)


async def check_green_hosting(
    domain: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bool:
    """True when the Green Web Foundation lists the domain as green. False on any error."""
    if not domain:
        return False

    url = f"{settings.GREEN_CHECK_URL.rstrip('/')}/{domain}"
    try:
        async with httpx.AsyncClient(timeout=settings.GREEN_CHECK_TIMEOUT, transport=transport) as client:
            response = await client.get(url)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Green hosting lookup failed for {domain}: {e}")
        return False

    return isinstance(data, dict) and bool(data.get("green"))
