"""Mapping between entity models and flat form data.

Form data is what an editing form holds: text inputs as strings and
checkboxes as booleans (or "true"/"false"-like strings when they come from
the command line). Each form class converts a model into form data for
editing, and form data back into the fields a manager accepts.
"""

from typing import Any

from craft_cms.exceptions import RecordValidationError
from craft_cms.registry import (
    CUSTOM_SECTION_VALUE,
    CustomSection,
    RegisteredSection,
    classify_section,
)
from schemas import Animal, Post, Producer, SiteImage

FormData = dict[str, Any]

TRUE_VALUES = {"1", "true", "on", "yes", "y"}


def _text(form: FormData, key: str) -> str:
    value = form.get(key)
    return "" if value is None else str(value).strip()


def _optional(form: FormData, key: str) -> str | None:
    return _text(form, key) or None


def _checked(form: FormData, key: str) -> bool:
    value = form.get(key, False)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def _integer(form: FormData, key: str) -> int | None:
    value = _text(form, key)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise RecordValidationError(f"{key} must be a whole number", errors=[f"{key}: {value!r}"])


def _number(form: FormData, key: str) -> float | None:
    value = _text(form, key)
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise RecordValidationError(f"{key} must be a number", errors=[f"{key}: {value!r}"])


def _blank(value: Any) -> str:
    return "" if value is None else str(value)


class PostForm:
    """Form mapping for journal posts."""

    @staticmethod
    def defaults() -> FormData:
        return {"status": "draft", "category": "slow-living"}

    @staticmethod
    def to_form(post: Post) -> FormData:
        return {
            "title": post.title,
            "slug": post.slug,
            "category": post.category,
            "excerpt": post.excerpt,
            "content": post.content,
            "image": _blank(post.image),
            "author": post.author,
            "read_time": _blank(post.read_time),
            "status": post.status,
        }

    @staticmethod
    def from_form(form: FormData) -> dict[str, Any]:
        return {
            "title": _text(form, "title"),
            "slug": _text(form, "slug"),
            "category": _text(form, "category"),
            "excerpt": _text(form, "excerpt"),
            "content": _text(form, "content"),
            "image": _optional(form, "image"),
            "author": _text(form, "author"),
            "read_time": _integer(form, "read_time"),
            "status": _text(form, "status"),
        }


class ProducerForm:
    """Form mapping for producers.

    Processing options are edited as one comma-separated text field.
    """

    @staticmethod
    def defaults() -> FormData:
        return {
            "is_sustainable": True,
            "is_organic": False,
            "is_animal_welfare_approved": False,
            "is_heritage_breed": False,
            "is_active": True,
        }

    @staticmethod
    def to_form(producer: Producer) -> FormData:
        return {
            "name": producer.name,
            "slug": producer.slug,
            "tagline": _blank(producer.tagline),
            "location": _blank(producer.location),
            "country": _blank(producer.country),
            "description": _blank(producer.description),
            "story": _blank(producer.story),
            "avatar_url": _blank(producer.avatar_url),
            "hero_image_url": _blank(producer.hero_image_url),
            "rating": str(producer.rating),
            "review_count": str(producer.review_count),
            "is_sustainable": producer.is_sustainable,
            "is_organic": producer.is_organic,
            "is_animal_welfare_approved": producer.is_animal_welfare_approved,
            "is_heritage_breed": producer.is_heritage_breed,
            "shearing_frequency": _blank(producer.shearing_frequency),
            "avg_yield": _blank(producer.avg_yield),
            "wool_type": _blank(producer.wool_type),
            "processing_options": ", ".join(producer.processing_options),
            "is_active": producer.is_active,
        }

    @staticmethod
    def from_form(form: FormData) -> dict[str, Any]:
        processing = [
            option.strip()
            for option in _text(form, "processing_options").split(",")
            if option.strip()
        ]
        return {
            "name": _text(form, "name"),
            "slug": _text(form, "slug"),
            "tagline": _optional(form, "tagline"),
            "location": _optional(form, "location"),
            "country": _optional(form, "country"),
            "description": _optional(form, "description"),
            "story": _optional(form, "story"),
            "avatar_url": _optional(form, "avatar_url"),
            "hero_image_url": _optional(form, "hero_image_url"),
            "rating": _number(form, "rating") or 0,
            "review_count": _integer(form, "review_count") or 0,
            "is_sustainable": _checked(form, "is_sustainable"),
            "is_organic": _checked(form, "is_organic"),
            "is_animal_welfare_approved": _checked(form, "is_animal_welfare_approved"),
            "is_heritage_breed": _checked(form, "is_heritage_breed"),
            "shearing_frequency": _optional(form, "shearing_frequency"),
            "avg_yield": _optional(form, "avg_yield"),
            "wool_type": _optional(form, "wool_type"),
            "processing_options": processing,
            "is_active": _checked(form, "is_active"),
        }


class AnimalForm:
    """Form mapping for adoptable animals."""

    @staticmethod
    def defaults() -> FormData:
        return {"is_available": True, "is_featured": False, "currency": "EUR"}

    @staticmethod
    def to_form(animal: Animal) -> FormData:
        return {
            "producer_id": animal.producer_id,
            "name": animal.name,
            "animal_type": animal.animal_type,
            "breed": animal.breed,
            "age": _blank(animal.age),
            "color": _blank(animal.color),
            "personality": _blank(animal.personality),
            "image_url": _blank(animal.image_url),
            "price_per_year": str(animal.price_per_year),
            "currency": animal.currency,
            "is_available": animal.is_available,
            "is_featured": animal.is_featured,
        }

    @staticmethod
    def from_form(form: FormData) -> dict[str, Any]:
        return {
            "producer_id": _text(form, "producer_id"),
            "name": _text(form, "name"),
            "animal_type": _text(form, "animal_type"),
            "breed": _text(form, "breed"),
            "age": _integer(form, "age"),
            "color": _optional(form, "color"),
            "personality": _optional(form, "personality"),
            "image_url": _optional(form, "image_url"),
            "price_per_year": _number(form, "price_per_year"),
            "currency": _text(form, "currency") or "EUR",
            "is_available": _checked(form, "is_available"),
            "is_featured": _checked(form, "is_featured"),
        }


class SiteImageForm:
    """Form mapping for site images.

    The section picker holds either a registered section id or the
    ``custom`` escape hatch value, in which case ``section_custom`` carries
    the free-text name.
    """

    @staticmethod
    def defaults() -> FormData:
        return {"is_active": True}

    @staticmethod
    def to_form(image: SiteImage) -> FormData:
        choice = classify_section(image.page, image.section)
        if isinstance(choice, RegisteredSection):
            section, custom = choice.section, ""
        else:
            section, custom = CUSTOM_SECTION_VALUE, choice.name
        return {
            "page": image.page,
            "section": section,
            "section_custom": custom,
            "description": _blank(image.description),
            "image_url": image.image_url,
            "alt_text": _blank(image.alt_text),
            "is_active": image.is_active,
        }

    @staticmethod
    def from_form(form: FormData) -> dict[str, Any]:
        """Build site image fields; ``section`` becomes a section choice.

        Raises:
            RecordValidationError: If no section was selected or entered
        """
        value = _text(form, "section")
        if value == CUSTOM_SECTION_VALUE:
            choice = CustomSection(_text(form, "section_custom"))
        elif value:
            choice = RegisteredSection(value)
        else:
            raise RecordValidationError("Please select or enter a section")
        return {
            "page": _text(form, "page"),
            "section": choice,
            "description": _optional(form, "description"),
            "image_url": _text(form, "image_url"),
            "alt_text": _optional(form, "alt_text"),
            "is_active": _checked(form, "is_active"),
        }
