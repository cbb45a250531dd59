"""Classification result — structured triage of one complaint."""

from dataclasses import dataclass, field

from app.domain.value_objects.enums import Category, Priority

NO_LOCATION = "No location mentioned"


@dataclass
class ClassificationResult:
    category: Category
    location: str
    priority: Priority
    summary: str
    reasoning: list[str] = field(default_factory=list)
    fallback_used: bool = False

    def has_location(self) -> bool:
        loc = (self.location or "").strip()
        return bool(loc) and loc.lower() != NO_LOCATION.lower()
