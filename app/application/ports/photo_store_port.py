"""Port interface for storing uploaded complaint photos."""

from abc import ABC, abstractmethod

from app.domain.entities.complaint import PhotoUpload


class PhotoStorePort(ABC):
    @abstractmethod
    async def save(self, photo: PhotoUpload) -> str:
        """Persist the photo bytes and return a reference to store on the ticket."""
        ...
