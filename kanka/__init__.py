"""
Typed client for the Kanka campaign-management API.

    from kanka import Client, SimpleCharacter

    client = Client(token)
    characters = client.characters.index(5272)
    hero = client.characters.create(5272, SimpleCharacter(name="Penny Galvenrise"))
"""

from .client import Client
from .endpoints import Endpoint
from .errors import (
    DecodeError,
    InvalidArgumentError,
    InvalidIDError,
    KankaError,
    NotFoundError,
    PayloadValidationError,
    RequestBuildError,
    ServerError,
    TransportError,
    ValidationKind,
)
from .models import (
    Attribute,
    Calendar,
    Campaign,
    CampaignList,
    Character,
    Conversation,
    DiceRoll,
    EntityEvent,
    EntityFile,
    EntityInventory,
    EntityNote,
    EntityTag,
    Event,
    Family,
    Item,
    Journal,
    KankaModel,
    Location,
    MapPoint,
    Member,
    Note,
    Organization,
    OrganizationMember,
    Profile,
    Quest,
    QuestCharacter,
    QuestItem,
    QuestLocation,
    QuestOrganization,
    Race,
    Relation,
    ResourceList,
    SearchResult,
    SimpleAttribute,
    SimpleCalendar,
    SimpleCharacter,
    SimpleConversation,
    SimpleDiceRoll,
    SimpleEntityEvent,
    SimpleEntityFile,
    SimpleEntityInventory,
    SimpleEntityNote,
    SimpleEntityTag,
    SimpleEvent,
    SimpleFamily,
    SimpleItem,
    SimpleJournal,
    SimpleLocation,
    SimpleMapPoint,
    SimpleNote,
    SimpleOrganization,
    SimpleOrganizationMember,
    SimpleQuest,
    SimpleQuestCharacter,
    SimpleQuestItem,
    SimpleQuestLocation,
    SimpleQuestOrganization,
    SimpleRace,
    SimpleRelation,
    SimpleTag,
    Tag,
)
from .settings import KankaSettings, get_settings

__all__ = [
    "Client",
    "Endpoint",
    "KankaSettings",
    "get_settings",
    # Errors
    "KankaError",
    "InvalidArgumentError",
    "InvalidIDError",
    "PayloadValidationError",
    "ValidationKind",
    "RequestBuildError",
    "TransportError",
    "DecodeError",
    "ServerError",
    "NotFoundError",
    # Models
    "ResourceList",
    "Profile",
    "Campaign",
    "CampaignList",
    "Member",
    "SearchResult",
    "Character",
    "SimpleCharacter",
    "Location",
    "SimpleLocation",
    "Family",
    "SimpleFamily",
    "Organization",
    "SimpleOrganization",
    "Item",
    "KankaModel",
    "SimpleItem",
    "Note",
    "SimpleNote",
    "Event",
    "SimpleEvent",
    "Calendar",
    "SimpleCalendar",
    "Race",
    "SimpleRace",
    "Quest",
    "SimpleQuest",
    "Journal",
    "SimpleJournal",
    "Tag",
    "SimpleTag",
    "Conversation",
    "SimpleConversation",
    "DiceRoll",
    "SimpleDiceRoll",
    "Attribute",
    "SimpleAttribute",
    "EntityEvent",
    "SimpleEntityEvent",
    "EntityFile",
    "SimpleEntityFile",
    "EntityInventory",
    "SimpleEntityInventory",
    "EntityNote",
    "SimpleEntityNote",
    "EntityTag",
    "SimpleEntityTag",
    "Relation",
    "SimpleRelation",
    "MapPoint",
    "SimpleMapPoint",
    "OrganizationMember",
    "SimpleOrganizationMember",
    "QuestCharacter",
    "SimpleQuestCharacter",
    "QuestItem",
    "SimpleQuestItem",
    "QuestLocation",
    "SimpleQuestLocation",
    "QuestOrganization",
    "SimpleQuestOrganization",
]
