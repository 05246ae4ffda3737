"""
Endpoint paths for the Kanka API.

An Endpoint is an immutable string that knows how to grow itself into a full
resource path, e.g. ``campaigns/5272/entities/430214/attributes``.
"""

from datetime import datetime, timezone

import httpx

from .errors import InvalidIDError

SYNC_PARAM = "lastSync"


class Endpoint(str):
    """A relative API path. Every operation returns a new Endpoint."""

    def append(self, suffix: str) -> "Endpoint":
        """Return the endpoint with ``suffix`` concatenated as-is."""
        return Endpoint(str(self) + suffix)

    def concat(self, other: str) -> "Endpoint":
        """Return the endpoint with ``other`` added as a sub-path."""
        return self.append("/" + str(other))

    def with_id(self, resource_id: int) -> "Endpoint":
        """Return the endpoint with ``/<resource_id>`` added.

        Raises:
            InvalidIDError: if the ID is negative or not an integer.
        """
        if isinstance(resource_id, bool) or not isinstance(resource_id, int) or resource_id < 0:
            raise InvalidIDError(resource_id)
        return self.append(f"/{resource_id}")

    def with_since(self, since: datetime) -> "Endpoint":
        """Return the endpoint filtered to resources changed after ``since``."""
        query = str(httpx.QueryParams({SYNC_PARAM: format_timestamp(since)}))
        separator = "&" if "?" in self else "?"
        return self.append(separator + query)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as RFC 3339. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


# Account level
PROFILE = Endpoint("profile")
CAMPAIGN = Endpoint("campaigns")
USERS = Endpoint("users")
SEARCH = Endpoint("search")

# Core objects
CHARACTER = Endpoint("characters")
LOCATION = Endpoint("locations")
MAP_POINT = Endpoint("map_points")
FAMILY = Endpoint("families")
ORGANIZATION = Endpoint("organisations")
ORGANIZATION_MEMBER = Endpoint("organisation_members")
ITEM = Endpoint("items")
NOTE = Endpoint("notes")
EVENT = Endpoint("events")
CALENDAR = Endpoint("calendars")
RACE = Endpoint("races")
QUEST = Endpoint("quests")
QUEST_CHARACTER = Endpoint("quest_characters")
QUEST_ITEM = Endpoint("quest_items")
QUEST_LOCATION = Endpoint("quest_locations")
QUEST_ORGANIZATION = Endpoint("quest_organisations")
JOURNAL = Endpoint("journals")
TAG = Endpoint("tags")
CONVERSATION = Endpoint("conversations")
DICE_ROLL = Endpoint("dice_rolls")

# Entity sub-resources
ENTITY = Endpoint("entities")
ATTRIBUTE = Endpoint("attributes")
ENTITY_EVENT = Endpoint("entity_events")
ENTITY_FILE = Endpoint("entity_files")
ENTITY_INVENTORY = Endpoint("inventory")
ENTITY_NOTE = Endpoint("entity_notes")
ENTITY_TAG = Endpoint("entity_tags")
RELATION = Endpoint("relations")
