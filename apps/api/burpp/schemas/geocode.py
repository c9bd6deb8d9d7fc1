from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GeocodeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    zip_code: Optional[str] = Field(None, alias="zipCode")


class GeocodeResponse(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None
