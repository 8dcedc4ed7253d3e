from __future__ import annotations
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

class CarDetailsIn(BaseModel):
    model: Optional[str] = Field(None, max_length=200)
    year: Optional[str] = Field(None, pattern=r"^(\d{4})?$")
    color: Optional[str] = Field(None, max_length=100)
    license_plate: Optional[str] = Field(None, max_length=50)
    fuel_type: Optional[str] = Field(None, max_length=50)
    next_service_date: Optional[date] = None

class CarLocationIn(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    description: Optional[str] = Field(None, max_length=500)
