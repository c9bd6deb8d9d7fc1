import logging

from fastapi import APIRouter, Depends, HTTPException

from burpp.providers import Geocoder, GeocodingServiceError, get_geocoder
from burpp.schemas import GeocodeRequest, GeocodeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["geocode"])


@router.post("/geocode", response_model=GeocodeResponse)
async def geocode(
    body: GeocodeRequest,
    geocoder: Geocoder = Depends(get_geocoder),
):
    zip_code = (body.zip_code or "").strip()
    if not zip_code:
        raise HTTPException(status_code=400, detail="Zip code is required")
    try:
        point = await geocoder.lookup(zip_code)
    except GeocodingServiceError as e:
        logger.error("Geocoding error for %r: %s", zip_code, e)
        raise HTTPException(status_code=500, detail="Failed to geocode zip code")
    if point is None:
        return GeocodeResponse(lat=None, lng=None)
    return GeocodeResponse(lat=point.lat, lng=point.lng)
