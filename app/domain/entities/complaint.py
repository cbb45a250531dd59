"""Complaint — a raw citizen submission, before structuring."""

from dataclasses import dataclass

from app.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class PhotoUpload:
    content: bytes
    mime_type: str
    filename: str | None = None


@dataclass(frozen=True)
class Complaint:
    message: str
    photo: PhotoUpload | None = None
    location: GeoPoint | None = None
    city: str | None = None
    state: str | None = None
    submitter_id: str | None = None

    def has_photo(self) -> bool:
        return self.photo is not None
