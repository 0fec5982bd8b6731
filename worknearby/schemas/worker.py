"""Worker Schemas — Pydantic models for worker registration and profile edits.

Invariants:
    - WorkerRegister mirrors WorkerDraft; required-field and category checks stay in core
    - WorkerUpdate sends only the fields the caller set (exclude_unset)
    - Numeric fields refuse NaN and infinity before they reach core
"""

from pydantic import BaseModel, Field, field_validator

from worknearby.core.models import Availability, MapPosition, WorkerDraft


class AvailabilityIn(BaseModel):
    days: list[str] = Field(default_factory=list, max_length=7)
    hours: str = Field("", max_length=100)


class MapPositionIn(BaseModel):
    top: str = Field(max_length=20)
    left: str = Field(max_length=20)


class PortfolioItemIn(BaseModel):
    id: str | None = None
    image_url: str = Field(min_length=1, max_length=2000)
    description: str = Field("", max_length=500)


class WorkerRegister(BaseModel):
    """Worker registration form — becomes a pending profile."""
    name: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, max_length=40)
    category: str | None = None
    hourly_rate: float = Field(0.0, allow_inf_nan=False)
    location: str = Field("", max_length=200)
    description: str = Field("", max_length=5000)
    image_url: str = Field("", max_length=2000)
    rating: float = Field(0.0, allow_inf_nan=False)
    availability: AvailabilityIn = Field(default_factory=AvailabilityIn)
    sub_specializations: list[str] = Field(default_factory=list, max_length=50)
    map_position: MapPositionIn | None = None

    def to_draft(self) -> WorkerDraft:
        return WorkerDraft(
            name=self.name,
            phone=self.phone,
            category=self.category,
            hourly_rate=self.hourly_rate,
            location=self.location,
            description=self.description,
            image_url=self.image_url,
            rating=self.rating,
            availability=Availability(
                days=list(self.availability.days), hours=self.availability.hours,
            ),
            sub_specializations=list(self.sub_specializations),
            map_position=(
                MapPosition(top=self.map_position.top, left=self.map_position.left)
                if self.map_position else None
            ),
        )


class WorkerUpdate(BaseModel):
    """Partial profile edit. id, status and reviews are not editable."""
    name: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, max_length=40)
    rating: float | None = Field(None, allow_inf_nan=False)
    hourly_rate: float | None = Field(None, allow_inf_nan=False)
    location: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=5000)
    image_url: str | None = Field(None, max_length=2000)
    availability: AvailabilityIn | None = None
    sub_specializations: list[str] | None = None
    portfolio: list[PortfolioItemIn] | None = None
    map_position: MapPositionIn | None = None

    def to_changes(self) -> dict:
        """Fields the caller set; an explicit null only clears map_position."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key == "map_position"
        }


class PortfolioItemCreate(BaseModel):
    image_url: str = Field(min_length=1, max_length=2000)
    description: str = Field("", max_length=500)

    @field_validator("image_url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("image_url cannot be empty or whitespace")
        return v
