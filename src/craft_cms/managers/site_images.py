"""Site images collection manager."""

from typing import Any

from craft_cms.registry import CustomSection, RegisteredSection, resolve_section
from schemas.site_image import SiteImage

from .base import StoreCollectionManager


class SiteImagesManager(StoreCollectionManager[SiteImage]):
    """Manages site images placed in registered page sections.

    The ``section`` field of a write is a section choice
    (``RegisteredSection`` or ``CustomSection``) checked against the page
    registry. A plain string is taken as a registered section.
    """

    collection = "site_images"
    model = SiteImage
    order = ("page", True)

    def _normalize(self, fields: dict[str, Any]) -> dict[str, Any]:
        data = dict(fields)
        page = data.get("page") or ""
        choice = data.get("section")
        if not choice:
            choice = CustomSection("")
        elif isinstance(choice, str):
            choice = RegisteredSection(choice)
        data["section"] = resolve_section(page, choice)
        return data

    def grouped_by_page(self) -> dict[str, list[SiteImage]]:
        """Cached images grouped by page, in load order."""
        groups: dict[str, list[SiteImage]] = {}
        for image in self.state.items:
            groups.setdefault(image.page, []).append(image)
        return groups

    def stats(self) -> dict[str, int]:
        images = self.state.items
        return {
            "total": len(images),
            "active": sum(1 for i in images if i.is_active),
            "pages": len({i.page for i in images}),
        }
