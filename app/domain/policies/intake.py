"""Intake normalization — shapes raw form input into a Complaint."""

from __future__ import annotations

import logging

from app.domain.entities.complaint import Complaint, PhotoUpload
from app.domain.exceptions import EmptyComplaint
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

DEFAULT_PHOTO_MIME_TYPE = "image/jpeg"


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def normalize_complaint(
    message: str | None,
    photo: bytes | None = None,
    photo_mime_type: str | None = None,
    photo_filename: str | None = None,
    lat: str | float | None = None,
    lng: str | float | None = None,
    city: str | None = None,
    state: str | None = None,
    submitter_id: str | None = None,
) -> Complaint:
    """Validate a raw submission and return a canonical Complaint.

    Content is not interpreted. Coordinates are optional: an unparsable or
    out-of-range pair is dropped, never rejected.

    Raises:
        EmptyComplaint: if the message is missing or blank after trimming.
    """
    text = clean_string(message)
    if text is None:
        raise EmptyComplaint("Complaint text is empty")

    upload = None
    if photo:
        upload = PhotoUpload(
            content=photo,
            mime_type=clean_string(photo_mime_type) or DEFAULT_PHOTO_MIME_TYPE,
            filename=clean_string(photo_filename),
        )

    raw_lat = clean_string(str(lat)) if lat is not None else None
    raw_lng = clean_string(str(lng)) if lng is not None else None
    location = GeoPoint.from_raw(raw_lat, raw_lng)
    if location is None and (raw_lat or raw_lng):
        logger.warning("Dropping unusable coordinates lat=%r lng=%r", lat, lng)

    return Complaint(
        message=text,
        photo=upload,
        location=location,
        city=clean_string(city),
        state=clean_string(state),
        submitter_id=clean_string(submitter_id),
    )
