"""Blog post schema.

Posts are stored locally rather than in the record store, in the camelCase
shape the site's journal pages read (``readTime``, ``updatedAt``).
"""

from typing import Literal

from pydantic import BaseModel, Field

PostCategory = Literal[
    "slow-living",
    "techniques",
    "tutorials",
    "community",
    "leather-craft",
]

CATEGORY_LABELS: dict[str, str] = {
    "slow-living": "SLOW LIVING",
    "techniques": "TECHNIQUES",
    "tutorials": "TUTORIALS",
    "community": "COMMUNITY",
    "leather-craft": "LEATHER CRAFT",
}


def category_label(category: str) -> str:
    """Display label for a post category."""
    return CATEGORY_LABELS.get(category, category.upper())


class Post(BaseModel):
    """A journal post.

    Attributes:
        id: Locally generated identifier
        title: Post title
        slug: URL slug
        category: One of the five journal categories
        excerpt: Short teaser shown in listings
        content: Markdown body
        image: Optional header image URL
        author: Display name of the author
        read_time: Estimated reading time in minutes; null in posts saved
            with an empty reading time field
        status: Publication status
        date: Creation timestamp (ISO string); listings sort on it
        updated_at: Last edit timestamp (ISO string)
    """

    id: str
    title: str
    slug: str
    category: PostCategory
    excerpt: str = ""
    content: str = ""
    image: str | None = None
    author: str
    read_time: int | None = Field(alias="readTime", gt=0)
    status: Literal["draft", "published"] = "draft"
    date: str
    updated_at: str | None = Field(default=None, alias="updatedAt")

    model_config = {"extra": "allow", "populate_by_name": True}
