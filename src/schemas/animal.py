"""Adoptable animal schemas."""

from pydantic import BaseModel, Field


class AnimalProducer(BaseModel):
    """Owning producer fields embedded by the animals join."""

    name: str
    slug: str


class Animal(BaseModel):
    """An animal listed for adoption by exactly one producer."""

    id: str | None = None
    producer_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    animal_type: str
    breed: str
    age: int | None = None
    color: str | None = None
    personality: str | None = None
    image_url: str | None = None
    price_per_year: float = Field(ge=0)
    currency: str = "EUR"
    is_available: bool = True
    is_featured: bool = False

    created_at: str | None = None
    updated_at: str | None = None

    # Embedded by select("*,producer:producers(name,slug)")
    producer: AnimalProducer | None = None

    model_config = {"extra": "allow"}
