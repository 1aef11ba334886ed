"""Tests for typed access to the dynamic fields of content entries."""

from datetime import date, datetime

import pytest

from content_mounter import (
    CastError,
    ContentEntry,
    ContentField,
    ContentType,
    FileRef,
    UnknownFieldError,
)
from content_mounter.core.values import Localized, Scalar
from content_mounter.i18n import use_locale


def _cities() -> ContentType:
    return ContentType(
        "cities",
        fields=[
            ContentField("name", localized=True),
            ContentField("description", type="text", localized=True),
            ContentField("founded_on", type="date"),
            ContentField("photo", type="file"),
            ContentField("district", type="select"),
        ],
    )


def test_string_field_round_trip():
    """Plain fields return the stored value unchanged."""
    entry = _cities().build_entry(name="Paris")
    entry.set("district", "Centre")

    assert entry.get("district") == "Centre"
    assert entry.get("name") == "Paris"


def test_date_field_parses_text():
    entry = _cities().build_entry(name="Paris", founded_on="2012/01/20")

    assert entry.get("founded_on") == date(2012, 1, 20)


def test_date_field_passes_dates_through():
    """Casting an already-cast date returns it unchanged, every time."""
    founded = date(1850, 3, 1)
    entry = _cities().build_entry(name="Paris", founded_on=founded)

    assert entry.get("founded_on") is founded
    assert entry.get("founded_on") is founded

    moment = datetime(2020, 5, 17, 10, 30)
    entry.set("founded_on", moment)
    assert entry.get("founded_on") is moment


def test_date_field_raises_on_malformed_text():
    entry = _cities().build_entry(name="Paris", founded_on="not a date at all")

    with pytest.raises(CastError) as excinfo:
        entry.get("founded_on")

    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.__cause__ is not None


def test_file_field_wraps_url():
    entry = _cities().build_entry(name="Paris", photo="/samples/paris.jpg")

    photo = entry.get("photo")

    assert photo == FileRef(url="/samples/paris.jpg")
    assert photo.to_dict() == {"url": "/samples/paris.jpg"}


def test_localized_values_are_isolated_per_locale():
    entry = _cities().build_entry(name="Paris")

    with use_locale("en"):
        entry.set("description", "City of light")
    with use_locale("fr"):
        entry.set("description", "Ville lumière")
    with use_locale("en"):
        entry.set("description", "Capital of France")

    assert entry.get("description", locale="en") == "Capital of France"
    assert entry.get("description", locale="fr") == "Ville lumière"


def test_missing_translation_reads_as_none():
    entry = _cities().build_entry(name="Paris")

    with use_locale("de"):
        assert entry.get("name") is None


def test_explicit_locale_wins_over_context():
    entry = _cities().build_entry(name={"en": "Munich", "de": "München"})

    with use_locale("en"):
        assert entry.get("name", locale="de") == "München"
        entry.set("description", "Hauptstadt Bayerns", locale="de")

    assert entry.get("description", locale="de") == "Hauptstadt Bayerns"
    assert entry.get("description", locale="en") is None


def test_bulk_assignment_registers_locales():
    """A mapping value is a set of translations; every locale becomes known."""
    entry = _cities().build_entry(name="Paris")

    entry.set("description", {"en": "A", "fr": "B"})

    assert "fr" in entry.locales
    assert entry.translated_in("en")
    assert entry.get("description", locale="en") == "A"
    assert entry.get("description", locale="fr") == "B"


def test_bulk_assignment_merges_with_existing_translations():
    entry = _cities().build_entry(name="Paris")
    entry.set("description", {"en": "A", "fr": "B"})

    entry.set("description", {"fr": "C", "es": "D"})

    assert entry.dynamic_attributes["description"] == Localized({"en": "A", "fr": "C", "es": "D"})
    assert entry.locales == ["en", "fr", "es"]


def test_untranslated_field_ignores_locale():
    entry = _cities().build_entry(name="Paris")

    with use_locale("fr"):
        entry.set("district", "Centre")

    assert entry.dynamic_attributes["district"] == Scalar("Centre")
    with use_locale("de"):
        assert entry.get("district") == "Centre"


def test_mapping_on_untranslated_field_is_stored_as_is():
    entry = _cities().build_entry(name="Paris")

    entry.set("photo", {"fr": "/a.jpg"})

    assert entry.dynamic_attributes["photo"] == Scalar({"fr": "/a.jpg"})
    assert "fr" not in entry.locales


def test_trailing_assignment_marker_is_stripped():
    entry = _cities().build_entry(name="Paris")

    assert entry.is_dynamic_field("district=")
    assert entry.is_dynamic_field("district")
    assert not entry.is_dynamic_field("mayor=")

    entry.set("district=", "Marais")
    assert entry.get("district") == "Marais"


def test_core_fields_are_reachable_by_name_and_key():
    entry = _cities().build_entry(name="Paris", seo_title="Visit Paris")

    assert entry.get("seo_title") == "Visit Paris"
    assert entry.get("_slug") == "paris"
    assert entry.get("position") == 0

    entry.set("_visible", False)
    assert entry.visible is False


def test_unknown_field_read_raises():
    entry = _cities().build_entry(name="Paris")

    with pytest.raises(UnknownFieldError) as excinfo:
        entry.get("mayor")

    assert excinfo.value.name == "mayor"
    assert excinfo.value.content_type == "cities"


def test_unknown_field_write_raises_without_mutating():
    entry = _cities().build_entry(name="Paris")
    before = dict(entry.dynamic_attributes)

    with pytest.raises(AttributeError) as excinfo:
        entry.set("mayor", "Anne")

    assert isinstance(excinfo.value, UnknownFieldError)
    assert excinfo.value.name == "mayor"
    assert str(excinfo.value) == "Unknown field 'mayor' for content type 'cities'"
    assert entry.dynamic_attributes == before


def test_unknown_constructor_attribute_raises():
    with pytest.raises(UnknownFieldError):
        _cities().build_entry(name="Paris", mayor="Anne")


def test_entry_without_content_type_has_no_dynamic_fields():
    entry = ContentEntry()

    assert entry.label is None
    assert entry.slug is None
    assert not entry.is_dynamic_field("name")
    with pytest.raises(UnknownFieldError):
        entry.get("name")


def _countries_and_cities() -> tuple[ContentType, ContentType]:
    countries = ContentType("countries", fields=[ContentField("name")])
    cities = ContentType(
        "cities",
        fields=[
            ContentField("name"),
            ContentField("country", type="belongs_to", klass=countries, localized=True),
        ],
    )
    countries.add_field(
        ContentField("cities", type="has_many", klass=cities, inverse_of="country")
    )
    return countries, cities


def test_belongs_to_resolves_by_permalink_or_label():
    countries, cities = _countries_and_cities()
    france = countries.build_entry(name="France")

    paris = cities.build_entry(name="Paris", country="france")
    lyon = cities.build_entry(name="Lyon", country="France")
    berlin = cities.build_entry(name="Berlin", country="germany")

    assert paris.get("country") is france
    assert lyon.get("country") is france
    assert berlin.get("country") is None


def test_relationship_is_never_translated():
    """A localized flag on a relationship does not make it per-locale."""
    countries, cities = _countries_and_cities()
    france = countries.build_entry(name="France")
    paris = cities.build_entry(name="Paris")

    with use_locale("fr"):
        paris.set("country", "france")

    assert paris.dynamic_attributes["country"] == Scalar("france")
    with use_locale("en"):
        assert paris.get("country") is france
    with use_locale("de"):
        assert paris.get("country") is france


def test_relationship_matches_slug_written_in_another_locale():
    """The target slug was set under fr; the shared reference resolves everywhere."""
    countries, cities = _countries_and_cities()
    with use_locale("fr"):
        germany = countries.build_entry(name="Allemagne")
    berlin = cities.build_entry(name="Berlin", country="allemagne")

    assert germany.permalinks() == ["allemagne"]
    assert germany.permalink_in("en") is None
    assert berlin.get("country") is germany
    with use_locale("de"):
        assert berlin.get("country") is germany


def test_relationship_lookup_uses_explicit_locale():
    countries = ContentType("countries", fields=[ContentField("name", localized=True)])
    cities = ContentType(
        "cities",
        fields=[
            ContentField("name"),
            ContentField("country", type="belongs_to", klass=countries),
        ],
    )
    france = countries.build_entry(name={"en": "France", "fr": "La France"})
    paris = cities.build_entry(name="Paris", country="La France")

    assert paris.get("country") is None
    assert paris.get("country", locale="fr") is france


def test_has_many_matches_inverse_by_label_and_permalink():
    countries, cities = _countries_and_cities()
    france = countries.build_entry(name="France")
    countries.build_entry(name="Germany")

    paris = cities.build_entry(name="Paris", country="france")
    lyon = cities.build_entry(name="Lyon", country="France")
    cities.build_entry(name="Berlin", country="germany")
    cities.build_entry(name="Nowhere")

    assert france.get("cities") == [paris, lyon]


def test_many_to_many_finds_entries_among_identifiers():
    tags = ContentType("tags", fields=[ContentField("name")])
    news = tags.build_entry(name="News")
    sports = tags.build_entry(name="Sports")
    tags.build_entry(name="Misc")
    posts = ContentType(
        "posts",
        fields=[ContentField("title"), ContentField("tags", type="many_to_many", klass=tags)],
    )

    post = posts.build_entry(title="Hello", tags=["sports", "News"])
    empty = posts.build_entry(title="Empty")

    assert post.get("tags") == [news, sports]
    assert empty.get("tags") == []


def test_relationship_without_target_type_resolves_to_nothing():
    posts = ContentType(
        "posts",
        fields=[
            ContentField("title"),
            ContentField("author", type="belongs_to"),
            ContentField("comments", type="has_many", inverse_of="post"),
        ],
    )
    post = posts.build_entry(title="Hello", author="john")

    assert post.get("author") is None
    assert post.get("comments") == []
