"""Page/section registry for site image placement.

Public page templates look up their imagery by ``(page, section)`` pair, so
the identifiers below are a contract with those templates and must not be
renamed.
"""

from dataclasses import dataclass

from craft_cms.exceptions import RecordValidationError

CUSTOM_SECTION_VALUE = "custom"


@dataclass(frozen=True)
class SectionDescriptor:
    """A registered image slot on a page."""

    section: str
    description: str


PAGE_SECTIONS: dict[str, tuple[SectionDescriptor, ...]] = {
    "index": (
        SectionDescriptor("hero-background", "Hero background image"),
        SectionDescriptor("how-it-works-icon-1", "How it works step 1 image (optional)"),
        SectionDescriptor("how-it-works-icon-2", "How it works step 2 image (optional)"),
        SectionDescriptor("how-it-works-icon-3", "How it works step 3 image (optional)"),
        SectionDescriptor("beginners-feature-1", "Beginners section feature 1 (optional)"),
        SectionDescriptor("beginners-feature-2", "Beginners section feature 2 (optional)"),
        SectionDescriptor("beginners-feature-3", "Beginners section feature 3 (optional)"),
    ),
    "landing-page": (
        SectionDescriptor("hero-image", "Hero image"),
        SectionDescriptor("about-section-image", "About section image (optional)"),
    ),
    "journal": (
        SectionDescriptor("featured-post-image", "Featured post placeholder (optional)"),
        SectionDescriptor("header-background", "Header background (optional)"),
    ),
    "fiber-producers": (
        SectionDescriptor("hero-background", "Hero background image"),
        SectionDescriptor("producer-placeholder", "Default producer card image"),
    ),
    "producer-profile": (
        SectionDescriptor("default-hero", "Default producer hero banner"),
        SectionDescriptor("default-avatar", "Default producer avatar (optional)"),
        SectionDescriptor("default-animal-image", "Default animal image (optional)"),
    ),
}

PAGES: tuple[str, ...] = tuple(PAGE_SECTIONS)


@dataclass(frozen=True)
class RegisteredSection:
    """A section chosen from the page's registered slots."""

    section: str


@dataclass(frozen=True)
class CustomSection:
    """A free-text section name entered through the escape hatch."""

    name: str


SectionChoice = RegisteredSection | CustomSection


def sections_for(page: str) -> list[SectionDescriptor]:
    """Return the registered sections of a page in declared order.

    Unknown pages have no registered sections.
    """
    return list(PAGE_SECTIONS.get(page, ()))


def is_registered(page: str, section: str) -> bool:
    return any(s.section == section for s in PAGE_SECTIONS.get(page, ()))


def resolve_section(page: str, choice: SectionChoice) -> str:
    """Validate a section choice for a page and return the value to store.

    Args:
        page: Page identifier; unknown pages are allowed
        choice: Registered or custom section

    Returns:
        The section string

    Raises:
        RecordValidationError: If a registered choice is not a slot of the
            page, or a custom name is blank
    """
    if isinstance(choice, RegisteredSection):
        if not is_registered(page, choice.section):
            raise RecordValidationError(
                f"Section {choice.section!r} is not registered for page {page!r}"
            )
        return choice.section

    name = choice.name.strip()
    if not name:
        raise RecordValidationError("Please select or enter a section")
    return name


def classify_section(page: str, section: str) -> SectionChoice:
    """Map a stored section back to the choice that produces it."""
    if is_registered(page, section):
        return RegisteredSection(section)
    return CustomSection(section)


def section_options(page: str) -> list[tuple[str, str]]:
    """Section picker options as (value, label) pairs.

    Registered sections come first, followed by the custom escape hatch.
    """
    options = [
        (s.section, f"{s.section} - {s.description}") for s in sections_for(page)
    ]
    options.append((CUSTOM_SECTION_VALUE, "Custom section..."))
    return options
