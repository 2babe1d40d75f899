"""Schema definitions for the craft club CMS."""

from .animal import Animal, AnimalProducer
from .post import CATEGORY_LABELS, Post, PostCategory, category_label
from .producer import Producer
from .site_image import SiteImage

__all__ = [
    "Animal",
    "AnimalProducer",
    "CATEGORY_LABELS",
    "Post",
    "PostCategory",
    "Producer",
    "SiteImage",
    "category_label",
]
