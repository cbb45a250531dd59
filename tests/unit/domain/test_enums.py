"""Tests for domain enums."""

from app.domain.value_objects.enums import Category, Priority, Team, TicketStatus


def test_categories_count():
    assert len(Category) == 7


def test_category_values():
    assert Category.WASTE_MANAGEMENT.value == "Waste Management"
    assert Category.ROADS_AND_POTHOLES.value == "Roads & Potholes"
    assert Category.STREETLIGHTS.value == "Streetlights"
    assert Category.WATER_SUPPLY.value == "Water Supply"
    assert Category.ANIMAL_DEATHS.value == "Animal Deaths"
    assert Category.ACCIDENTS.value == "Accidents"
    assert Category.ROAD_BLOCKAGE.value == "Road Blockage"


def test_priority_values():
    assert [p.value for p in Priority] == ["Low", "Medium", "High"]


def test_status_values():
    assert TicketStatus.OPEN.value == "Open"
    assert TicketStatus.IN_PROGRESS.value == "In Progress"
    assert TicketStatus.RESOLVED.value == "Resolved"


def test_team_values():
    assert {t.value for t in Team} == {
        "Road Crew", "Waste Team", "Electrical Team", "Animal Control", "Traffic Police",
    }


def test_enums_compare_as_strings():
    assert Priority.HIGH == "High"
    assert TicketStatus("In Progress") is TicketStatus.IN_PROGRESS
