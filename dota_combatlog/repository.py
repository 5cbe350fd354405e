"""Storage for parsed matches.

``MatchRepository`` is the only storage interface the service depends on.
``InMemoryMatchRepository`` backs tests and one-off analyses,
``SqlMatchRepository`` persists matches in SQLite through SQLAlchemy.
"""
import abc
import logging
import threading
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from dota_combatlog.events import Event, Match
from dota_combatlog.models import Base, MatchRecord, CombatLogEntry
from dota_combatlog.transformers import event_to_entry, entry_to_event

logger = logging.getLogger("dota_combatlog")


class MatchRepository(abc.ABC):
    """Storage contract for matches and their events."""

    @abc.abstractmethod
    def save(self, match: Match) -> str:
        """Store a match with all its events and return its identifier."""

    @abc.abstractmethod
    def find_by_id(self, match_id: str) -> Optional[Match]:
        """Return the match with its events, or None if it is unknown."""

    def exists(self, match_id: str) -> bool:
        return self.find_by_id(match_id) is not None

    def find_events_by_match_and_actor(self, match_id: str, actor: str) -> List[Event]:
        """Return the events of a match performed by ``actor``, in source order."""
        match = self.find_by_id(match_id)
        if match is None:
            return []
        return [event for event in match.events if event.actor == actor]


class InMemoryMatchRepository(MatchRepository):
    """Repository keeping matches in a dictionary."""

    def __init__(self):
        self._matches: Dict[str, Match] = {}
        self._lock = threading.Lock()

    def save(self, match: Match) -> str:
        with self._lock:
            if match.match_id in self._matches:
                raise ValueError(f"Match {match.match_id} is already stored")
            self._matches[match.match_id] = match
        return match.match_id

    def find_by_id(self, match_id: str) -> Optional[Match]:
        with self._lock:
            return self._matches.get(match_id)


class SqlMatchRepository(MatchRepository):
    """Repository persisting matches with SQLAlchemy."""

    def __init__(self, engine, batch_size: int = 1000):
        """Initialize the repository.

        Args:
            engine: SQLAlchemy engine to store matches in
            batch_size: Number of entries added to the session between flushes
        """
        self.engine = engine
        self.batch_size = batch_size
        self.Session = sessionmaker(bind=self.engine)

        # Create tables if they don't exist
        Base.metadata.create_all(self.engine)

    def save(self, match: Match) -> str:
        with self.Session() as session:
            try:
                session.add(MatchRecord(match_id=match.match_id, event_count=len(match.events)))
                session.flush()

                batch = []
                for sequence, event in enumerate(match.events):
                    batch.append(event_to_entry(event, match.match_id, sequence))
                    if len(batch) >= self.batch_size:
                        session.add_all(batch)
                        session.flush()
                        batch = []

                # Add any remaining entries
                if batch:
                    session.add_all(batch)
                    session.flush()

                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Error saving match {match.match_id}: {str(e)}")
                raise

        logger.info(f"Stored match {match.match_id} with {len(match.events)} events")
        return match.match_id

    def find_by_id(self, match_id: str) -> Optional[Match]:
        with self.Session() as session:
            record = session.get(MatchRecord, match_id)
            if record is None:
                return None
            events = self._to_events(record.entries)
        return Match(match_id=match_id, events=tuple(events))

    def exists(self, match_id: str) -> bool:
        with self.Session() as session:
            return session.get(MatchRecord, match_id) is not None

    def find_events_by_match_and_actor(self, match_id: str, actor: str) -> List[Event]:
        with self.Session() as session:
            entries = session.scalars(
                select(CombatLogEntry)
                .where(CombatLogEntry.match_id == match_id, CombatLogEntry.actor == actor)
                .order_by(CombatLogEntry.sequence)
            ).all()
            return self._to_events(entries)

    def list_matches(self) -> List[MatchRecord]:
        """Return all stored match records, oldest first."""
        with self.Session() as session:
            records = session.scalars(
                select(MatchRecord).order_by(MatchRecord.created_at)
            ).all()
            session.expunge_all()
        return list(records)

    @staticmethod
    def _to_events(entries) -> List[Event]:
        events = []
        for entry in entries:
            event = entry_to_event(entry)
            if event is not None:
                events.append(event)
        return events
