from pydantic import BaseModel, Field


class CampusLocationRead(BaseModel):
    id: str
    name: str
    category: str
    latitude: float
    longitude: float
    description: str | None
    floor_info: str | None

    model_config = {"from_attributes": True}


class ARProjectionRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    heading: float = Field(0.0, description="Compass heading in degrees, 0 = North, clockwise")


class ARMarkerRead(BaseModel):
    id: str
    name: str
    category: str
    color: str
    x: float
    y: float
    scale: float
    distance: float
    bearing: float
    relative_angle: float
