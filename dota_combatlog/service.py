"""Match service: ingestion and the four reporting queries."""
import logging
from typing import List, Optional

from dota_combatlog.aggregation import (
    HeroDamage, HeroItem, HeroKills, HeroSpells,
    damage_on, items_for, kill_counts, spells_for,
)
from dota_combatlog.events import Match
from dota_combatlog.exceptions import NotFoundError, ValidationError
from dota_combatlog.parser import CombatLogParser
from dota_combatlog.repository import MatchRepository

logger = logging.getLogger("dota_combatlog")


class MatchService:
    """Ingest combat logs and answer queries about stored matches."""

    def __init__(self, repository: MatchRepository, parser: Optional[CombatLogParser] = None):
        self.repository = repository
        self.parser = parser or CombatLogParser()

    def ingest(self, combat_log: str) -> str:
        """Parse a combat log, store its events and return the new match id.

        Raises:
            ValidationError: If the combat log is empty or only whitespace
        """
        if combat_log is None or not combat_log.strip():
            raise ValidationError("Combat log must not be blank")

        match = self.parser.parse(combat_log)
        match_id = self.repository.save(match)
        logger.info(f"Ingested match {match_id} with {len(match)} events")
        return match_id

    def find_match(self, match_id: str) -> Match:
        """Return the stored match or raise NotFoundError."""
        match = self.repository.find_by_id(match_id)
        if match is None:
            raise NotFoundError(match_id)
        return match

    def kills(self, match_id: str) -> List[HeroKills]:
        return kill_counts(self.find_match(match_id).events)

    def items(self, match_id: str, hero: str) -> List[HeroItem]:
        self._require(match_id)
        return items_for(self.repository.find_events_by_match_and_actor(match_id, hero), hero)

    def spells(self, match_id: str, hero: str) -> List[HeroSpells]:
        self._require(match_id)
        return spells_for(self.repository.find_events_by_match_and_actor(match_id, hero), hero)

    def damage(self, match_id: str, hero: str) -> List[HeroDamage]:
        return damage_on(self.find_match(match_id).events, hero)

    def _require(self, match_id: str) -> None:
        if not self.repository.exists(match_id):
            raise NotFoundError(match_id)
