"""Tests for form data mapping."""

import pytest

from craft_cms.exceptions import RecordValidationError
from craft_cms.forms import AnimalForm, PostForm, ProducerForm, SiteImageForm
from craft_cms.registry import CUSTOM_SECTION_VALUE, CustomSection, RegisteredSection
from schemas import Animal, Post, Producer, SiteImage

from conftest import make_animal, make_producer


class TestPostForm:
    """Tests for PostForm."""

    def test_round_trip(self, sample_post_record):
        """A post's form converts back into the same fields."""
        post = Post.model_validate(sample_post_record)

        fields = PostForm.from_form(PostForm.to_form(post))

        assert fields["title"] == post.title
        assert fields["read_time"] == 7
        assert fields["image"] is None
        assert fields["status"] == "published"

    def test_blank_read_time(self):
        assert PostForm.from_form({"read_time": " "})["read_time"] is None

    def test_non_numeric_read_time(self):
        with pytest.raises(RecordValidationError, match="read_time must be a whole number"):
            PostForm.from_form({"read_time": "ten"})

    def test_defaults_to_draft(self):
        assert PostForm.defaults()["status"] == "draft"


class TestProducerForm:
    """Tests for ProducerForm."""

    def test_processing_options_edited_as_text(self):
        producer = Producer.model_validate(make_producer("p1", "Hill Farm"))

        form = ProducerForm.to_form(producer)

        assert form["processing_options"] == "Raw fleece, Roving"
        assert form["story"] == ""

    def test_from_form(self):
        fields = ProducerForm.from_form({
            "name": " Hill Farm ",
            "processing_options": "Yarn,, Roving ,",
            "rating": "",
            "review_count": "",
            "is_organic": "on",
            "is_sustainable": "false",
            "story": "  ",
        })

        assert fields["name"] == "Hill Farm"
        assert fields["processing_options"] == ["Yarn", "Roving"]
        assert fields["rating"] == 0
        assert fields["review_count"] == 0
        assert fields["is_organic"] is True
        assert fields["is_sustainable"] is False
        assert fields["is_active"] is False
        assert fields["story"] is None

    def test_round_trip_validates(self):
        """Form fields from a stored producer validate as a Producer."""
        producer = Producer.model_validate(make_producer("p1", "Hill Farm"))

        fields = ProducerForm.from_form(ProducerForm.to_form(producer))

        assert Producer.model_validate(fields).rating == 4.8


class TestAnimalForm:
    """Tests for AnimalForm."""

    def test_round_trip(self):
        animal = Animal.model_validate(make_animal("a1", "p1", "Clover", age=None))

        fields = AnimalForm.from_form(AnimalForm.to_form(animal))

        assert fields["producer_id"] == "p1"
        assert fields["age"] is None
        assert fields["price_per_year"] == 120.0
        assert fields["is_available"] is True

    def test_currency_defaults_to_eur(self):
        assert AnimalForm.from_form({"currency": ""})["currency"] == "EUR"

    def test_bad_price(self):
        with pytest.raises(RecordValidationError, match="price_per_year must be a number"):
            AnimalForm.from_form({"price_per_year": "cheap"})


class TestSiteImageForm:
    """Tests for SiteImageForm."""

    def test_registered_section(self):
        fields = SiteImageForm.from_form({
            "page": "journal",
            "section": "header-background",
            "image_url": "https://cdn.example.com/h.jpg",
        })

        assert fields["section"] == RegisteredSection("header-background")

    def test_custom_section(self):
        fields = SiteImageForm.from_form({
            "page": "journal",
            "section": CUSTOM_SECTION_VALUE,
            "section_custom": " sidebar ",
        })

        assert fields["section"] == CustomSection("sidebar")

    def test_no_section(self):
        with pytest.raises(RecordValidationError, match="select or enter a section"):
            SiteImageForm.from_form({"page": "journal", "section": ""})

    def test_to_form_classifies_stored_section(self):
        """Unregistered stored sections open in the custom field."""
        image = SiteImage(page="journal", section="sidebar", image_url="https://cdn.example.com/s.jpg")

        form = SiteImageForm.to_form(image)

        assert form["section"] == CUSTOM_SECTION_VALUE
        assert form["section_custom"] == "sidebar"

    def test_to_form_registered_section(self):
        image = SiteImage(page="index", section="hero-background", image_url="https://cdn.example.com/h.jpg")

        form = SiteImageForm.to_form(image)

        assert form["section"] == "hero-background"
        assert form["section_custom"] == ""
