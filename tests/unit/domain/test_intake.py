"""Tests for intake normalization."""

import pytest

from app.domain.exceptions import EmptyComplaint
from app.domain.policies.intake import DEFAULT_PHOTO_MIME_TYPE, clean_string, normalize_complaint
from app.domain.value_objects.geo_point import GeoPoint


def test_clean_string():
    assert clean_string("  a b ") == "a b"
    assert clean_string("   ") is None
    assert clean_string(None) is None


@pytest.mark.parametrize("message", [None, "", "   ", "\n\t"])
def test_blank_complaint_rejected(message):
    with pytest.raises(EmptyComplaint):
        normalize_complaint(message)


def test_message_trimmed_only():
    c = normalize_complaint("  Garbage not collected on 5th Ave  ")
    assert c.message == "Garbage not collected on 5th Ave"
    assert c.photo is None
    assert c.location is None


def test_photo_attached_with_default_mime():
    c = normalize_complaint("Broken light", photo=b"\x89PNG", photo_mime_type="  ")
    assert c.has_photo()
    assert c.photo.mime_type == DEFAULT_PHOTO_MIME_TYPE
    assert c.photo.content == b"\x89PNG"


def test_empty_photo_is_no_photo():
    c = normalize_complaint("Broken light", photo=b"", photo_mime_type="image/png")
    assert c.photo is None


def test_coordinates_parsed():
    c = normalize_complaint("Dead dog", lat="12.97", lng="77.59")
    assert c.location == GeoPoint(12.97, 77.59)


def test_bad_coordinates_dropped_not_rejected():
    c = normalize_complaint("Dead dog", lat="north", lng="77.59")
    assert c.location is None
    assert c.message == "Dead dog"


def test_optional_fields_cleaned():
    c = normalize_complaint("x", city=" Pune ", state="", submitter_id="  u-1 ")
    assert c.city == "Pune"
    assert c.state is None
    assert c.submitter_id == "u-1"
