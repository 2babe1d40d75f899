"""Site image schema."""

from pydantic import BaseModel, Field


class SiteImage(BaseModel):
    """An image placed in a (page, section) slot of the public site.

    Nothing enforces one image per slot; duplicates coexist and the page
    templates pick whichever active record they find first.
    """

    id: str | None = None
    page: str = Field(min_length=1)
    section: str = Field(min_length=1)
    description: str | None = None
    image_url: str = Field(min_length=1)
    alt_text: str | None = None
    is_active: bool = True

    created_at: str | None = None
    updated_at: str | None = None

    model_config = {"extra": "allow"}
