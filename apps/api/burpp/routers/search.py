import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.core import NO_STORE_HEADERS, get_settings, limiter
from burpp.dependencies import get_db
from burpp.providers import Geocoder, get_geocoder
from burpp.schemas import VendorSearchErrorResponse, VendorSearchResponse
from burpp.services.search import search_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])

_settings = get_settings()


def _search_failed() -> JSONResponse:
    body = VendorSearchErrorResponse(error="Failed to search vendors")
    return JSONResponse(status_code=500, content=body.model_dump(), headers=NO_STORE_HEADERS)


@router.get(
    "/search-vendors",
    response_model=VendorSearchResponse,
    responses={500: {"model": VendorSearchErrorResponse}},
)
@limiter.limit(_settings.search_rate_limit)
async def search_vendors(
    request: Request,
    response: Response,
    category: str | None = Query(None, description="Category id the vendor must list"),
    q: str | None = Query(None, description="Free-text location or postal code"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=_settings.search_max_limit),
    bypass_cache: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    response.headers.update(NO_STORE_HEADERS)
    try:
        return await search_service.search_vendors(
            db,
            geocoder,
            category=category,
            q=q,
            page=page,
            limit=limit or _settings.search_default_limit,
            bypass_cache=bypass_cache,
        )
    except SQLAlchemyError:
        logger.exception("Vendor search failed (category=%r, q=%r)", category, q)
        await db.rollback()
        return _search_failed()
    except Exception:
        # driver errors (e.g. connection refused) are not wrapped by SQLAlchemy
        logger.exception("Vendor search failed unexpectedly (category=%r, q=%r)", category, q)
        try:
            await db.rollback()
        except Exception:
            logger.warning("Rollback after failed search also failed", exc_info=True)
        return _search_failed()
