"""Parser module for Dota combat logs."""
import re
import uuid
import logging
from typing import Callable, Iterable, List, Optional, Tuple
from tqdm import tqdm

from dota_combatlog.config.config import AppConfig
from dota_combatlog.events import (
    Event, Match, ItemPurchased, HeroKilled, SpellCast, DamageDone
)
from dota_combatlog.transformers import (
    HERO_PREFIX, ITEM_PREFIX, parse_timestamp, convert_numeric
)

logger = logging.getLogger("dota_combatlog")

_HERO = re.escape(HERO_PREFIX)

ITEM_PURCHASED_PATTERN = re.compile(
    _HERO + r"(?P<actor>\S+) buys item " + re.escape(ITEM_PREFIX) + r"(?P<item>\S+)"
)
HERO_KILLED_PATTERN = re.compile(
    _HERO + r"(?P<actor>\S+) kills " + _HERO + r"(?P<target>\S+)"
    r" with (?P<ability>\S+) Level (?P<ability_level>\d+)"
)
SPELL_CAST_PATTERN = re.compile(
    _HERO + r"(?P<actor>\S+) casts ability (?P<ability>\S+)"
    r" \(lvl (?P<ability_level>\d+)\) on " + _HERO + r"(?P<target>\S+)"
)
DAMAGE_DONE_PATTERN = re.compile(
    _HERO + r"(?P<actor>\S+) hits " + _HERO + r"(?P<target>\S+)"
    r" with (?P<damage>\d+) damage"
)


def _item_purchased(match: re.Match, timestamp: int) -> ItemPurchased:
    return ItemPurchased(
        timestamp=timestamp,
        actor=match.group("actor"),
        item=match.group("item"),
    )


def _hero_killed(match: re.Match, timestamp: int) -> HeroKilled:
    return HeroKilled(
        timestamp=timestamp,
        actor=match.group("actor"),
        target=match.group("target"),
        ability=match.group("ability"),
        ability_level=convert_numeric(match.group("ability_level")),
    )


def _spell_cast(match: re.Match, timestamp: int) -> SpellCast:
    return SpellCast(
        timestamp=timestamp,
        actor=match.group("actor"),
        ability=match.group("ability"),
        ability_level=convert_numeric(match.group("ability_level")),
        target=match.group("target"),
    )


def _damage_done(match: re.Match, timestamp: int) -> DamageDone:
    return DamageDone(
        timestamp=timestamp,
        actor=match.group("actor"),
        target=match.group("target"),
        damage=convert_numeric(match.group("damage")),
    )


# Evaluated in order, the first grammar that matches a line wins
GRAMMARS: Tuple[Tuple[re.Pattern, Callable[[re.Match, int], Event]], ...] = (
    (ITEM_PURCHASED_PATTERN, _item_purchased),
    (HERO_KILLED_PATTERN, _hero_killed),
    (SPELL_CAST_PATTERN, _spell_cast),
    (DAMAGE_DONE_PATTERN, _damage_done),
)


def parse_line(line: str) -> Optional[Event]:
    """Classify a single combat log line.

    Args:
        line: Raw log line

    Returns:
        The parsed event, or None if the line matches no known grammar
    """
    for pattern, build in GRAMMARS:
        match = pattern.search(line)
        if match:
            return build(match, parse_timestamp(line))
    return None


def new_match_id() -> str:
    """Generate a fresh match identifier."""
    return uuid.uuid4().hex


class CombatLogParser:
    """Parser for Dota combat logs.

    The parser holds no per-log state, one instance can parse any number of
    logs, including concurrently.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """Initialize the parser with the given configuration.

        Args:
            config: Application configuration, defaults are used when omitted
        """
        self.config = config or AppConfig()

    def parse(self, text: str) -> Match:
        """Parse the full content of a combat log.

        Every line that matches a grammar yields exactly one event, in source
        order. Identical lines yield identical, separate events.

        Args:
            text: Multi-line combat log content

        Returns:
            A new match holding the parsed events
        """
        match_id = new_match_id()
        events = self._parse_lines(text.splitlines())
        logger.info(f"Parsed {len(events)} events for match {match_id}")
        return Match(match_id=match_id, events=tuple(events))

    def parse_file(self, file_path: str) -> Match:
        """Parse a combat log file.

        Args:
            file_path: Path to a UTF-8 encoded combat log

        Returns:
            A new match holding the parsed events
        """
        logger.info(f"Parsing file: {file_path}")
        with open(file_path, 'r', encoding='utf-8') as f:
            return self.parse(f.read())

    def _parse_lines(self, lines: Iterable[str]) -> List[Event]:
        events = []
        skipped = 0

        for line_num, line in enumerate(
            tqdm(lines, desc="Parsing", unit="lines", disable=not self.config.show_progress),
            start=1,
        ):
            if not line.strip():
                continue

            event = parse_line(line)
            if event is None:
                skipped += 1
                logger.debug(f"Skipping unrecognized line {line_num}: {line!r}")
                continue
            events.append(event)

        if skipped:
            logger.info(f"Skipped {skipped} unrecognized lines")
        return events
