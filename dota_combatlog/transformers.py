"""Data transformation functions for Dota combat log lines and stored entries."""
import re
import logging
from typing import Optional
from datetime import datetime

from dota_combatlog.events import (
    Event, EventKind, ItemPurchased, HeroKilled, SpellCast, DamageDone
)
from dota_combatlog.models import CombatLogEntry

logger = logging.getLogger("dota_combatlog")

HERO_PREFIX = "npc_dota_hero_"
ITEM_PREFIX = "item_"
CLOCK_FORMAT = "%H:%M:%S.%f"
TIMESTAMP_PATTERN = re.compile(r"^\[(.*?)\]")


def parse_timestamp(line: str) -> int:
    """
    Extract the leading ``[HH:MM:SS.mmm]`` clock value of a line.

    Args:
        line: A raw combat log line

    Returns:
        int: Milliseconds since 00:00:00.000, or 0 if the clock is missing or malformed
    """
    match = TIMESTAMP_PATTERN.match(line)
    if not match:
        logger.debug(f"No timestamp found in line: {line!r}")
        return 0

    clock = match.group(1)
    try:
        parsed = datetime.strptime(clock, CLOCK_FORMAT)
    except ValueError:
        logger.debug(f"Could not parse timestamp: {clock}")
        return 0

    seconds = parsed.hour * 3600 + parsed.minute * 60 + parsed.second
    return seconds * 1000 + parsed.microsecond // 1000


def convert_numeric(value_str: Optional[str]) -> Optional[int]:
    """Convert a string value to an integer."""
    try:
        return int(value_str)
    except (ValueError, TypeError):
        logger.debug(f"Failed to convert to int: {value_str}")
        return None


def event_to_entry(event: Event, match_id: str, sequence: int) -> CombatLogEntry:
    """Transform an event into its database row.

    Args:
        event: Parsed event
        match_id: Identifier of the match the event belongs to
        sequence: Position of the event within the match

    Returns:
        CombatLogEntry model instance
    """
    if not isinstance(event, (ItemPurchased, HeroKilled, SpellCast, DamageDone)):
        raise TypeError(f"Unsupported event type: {type(event).__name__}")

    entry = CombatLogEntry(
        match_id=match_id,
        sequence=sequence,
        event_type=event.kind.value,
        timestamp=event.timestamp,
        actor=event.actor,
    )

    if isinstance(event, ItemPurchased):
        entry.item = event.item
    elif isinstance(event, (HeroKilled, SpellCast)):
        entry.target = event.target
        entry.ability = event.ability
        entry.ability_level = event.ability_level
    else:
        entry.target = event.target
        entry.damage = event.damage

    return entry


def entry_to_event(entry: CombatLogEntry) -> Optional[Event]:
    """Transform a database row back into an event.

    Args:
        entry: Stored combat log entry

    Returns:
        The event, or None if the row carries an unknown event type
    """
    try:
        kind = EventKind(entry.event_type)
    except ValueError:
        logger.warning(f"Skipping entry {entry.entry_id} with unknown event type: {entry.event_type}")
        return None

    timestamp = entry.timestamp or 0

    if kind is EventKind.ITEM_PURCHASED:
        return ItemPurchased(timestamp=timestamp, actor=entry.actor, item=entry.item)
    if kind is EventKind.HERO_KILLED:
        return HeroKilled(
            timestamp=timestamp,
            actor=entry.actor,
            target=entry.target,
            ability=entry.ability,
            ability_level=entry.ability_level,
        )
    if kind is EventKind.SPELL_CAST:
        return SpellCast(
            timestamp=timestamp,
            actor=entry.actor,
            ability=entry.ability,
            ability_level=entry.ability_level,
            target=entry.target,
        )
    return DamageDone(
        timestamp=timestamp,
        actor=entry.actor,
        target=entry.target,
        damage=entry.damage or 0,
    )
