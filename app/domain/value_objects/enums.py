"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class Category(str, Enum):
    WASTE_MANAGEMENT = "Waste Management"
    ROADS_AND_POTHOLES = "Roads & Potholes"
    STREETLIGHTS = "Streetlights"
    WATER_SUPPLY = "Water Supply"
    ANIMAL_DEATHS = "Animal Deaths"
    ACCIDENTS = "Accidents"
    ROAD_BLOCKAGE = "Road Blockage"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TicketStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"


class Team(str, Enum):
    ROAD_CREW = "Road Crew"
    WASTE_TEAM = "Waste Team"
    ELECTRICAL_TEAM = "Electrical Team"
    ANIMAL_CONTROL = "Animal Control"
    TRAFFIC_POLICE = "Traffic Police"
