"""Event model for the Dota combat log analyzer.

Each log line that the parser recognizes becomes one of four immutable event
classes. The classes share ``timestamp`` and ``actor``; everything else is
specific to the event kind, so a field that makes no sense for a kind simply
does not exist on it.
"""
import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


class EventKind(str, enum.Enum):
    """Kinds of events recognized in a combat log."""
    ITEM_PURCHASED = "ITEM_PURCHASED"
    HERO_KILLED = "HERO_KILLED"
    SPELL_CAST = "SPELL_CAST"
    DAMAGE_DONE = "DAMAGE_DONE"


@dataclass(frozen=True)
class ItemPurchased:
    """A hero bought an item."""
    timestamp: int
    actor: str
    item: str

    kind = EventKind.ITEM_PURCHASED


@dataclass(frozen=True)
class HeroKilled:
    """A hero killed another hero with an ability."""
    timestamp: int
    actor: str
    target: str
    ability: str
    ability_level: int

    kind = EventKind.HERO_KILLED


@dataclass(frozen=True)
class SpellCast:
    """A hero cast an ability on another hero."""
    timestamp: int
    actor: str
    ability: str
    ability_level: int
    target: str

    kind = EventKind.SPELL_CAST


@dataclass(frozen=True)
class DamageDone:
    """A hero hit another hero for some amount of damage."""
    timestamp: int
    actor: Optional[str]
    target: str
    damage: int

    kind = EventKind.DAMAGE_DONE


Event = Union[ItemPurchased, HeroKilled, SpellCast, DamageDone]

EVENT_CLASSES = {
    EventKind.ITEM_PURCHASED: ItemPurchased,
    EventKind.HERO_KILLED: HeroKilled,
    EventKind.SPELL_CAST: SpellCast,
    EventKind.DAMAGE_DONE: DamageDone,
}


@dataclass(frozen=True)
class Match:
    """One ingested combat log and the events parsed from it."""
    match_id: str
    events: Tuple[Event, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.events)

    def events_of(self, kind: EventKind) -> Tuple[Event, ...]:
        """Return the events of the given kind in source order."""
        return tuple(event for event in self.events if event.kind is kind)
