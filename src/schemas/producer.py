"""Fibre producer schema."""

from pydantic import BaseModel, Field


class Producer(BaseModel):
    """A fibre producer offering animals for adoption.

    ``animals_available`` is derived from the animals collection and
    maintained by the producer counter pass, never by producer edits.
    """

    id: str | None = None
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    tagline: str | None = None
    location: str | None = None
    country: str | None = None
    description: str | None = None
    story: str | None = None
    avatar_url: str | None = None
    hero_image_url: str | None = None
    rating: float = 0
    review_count: int = Field(default=0, ge=0)

    # Certifications
    is_sustainable: bool = True
    is_organic: bool = False
    is_animal_welfare_approved: bool = False
    is_heritage_breed: bool = False

    # What adopters receive
    shearing_frequency: str | None = None
    avg_yield: str | None = None
    wool_type: str | None = None
    processing_options: list[str] = []

    is_active: bool = True
    animals_available: int = Field(default=0, ge=0)

    created_at: str | None = None
    updated_at: str | None = None

    model_config = {"extra": "allow"}
