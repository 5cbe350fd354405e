"""Tests for the database models."""
import pytest
import os
import tempfile
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import sessionmaker

from dota_combatlog.models import (
    Base, MatchRecord, CombatLogEntry, init_db, get_db_engine
)


class TestModels:
    """Tests for the database models."""

    @pytest.fixture
    def db_session(self, db_engine):
        """Create a database session for testing."""
        Base.metadata.create_all(db_engine)
        Session = sessionmaker(bind=db_engine)
        session = Session()

        yield session

        # Clean up
        session.close()

    def test_init_db(self):
        """Test database initialization."""
        fd, db_path = tempfile.mkstemp(suffix='.db')
        os.close(fd)

        try:
            engine_url = f"sqlite:///{db_path}"
            init_db(engine_url)

            # Check that the tables were created
            engine = create_engine(engine_url)
            inspector = inspect(engine)
            assert inspector.has_table("matches")
            assert inspector.has_table("combat_log_entries")
            index_names = {index["name"] for index in inspector.get_indexes("combat_log_entries")}
            assert "ix_combat_log_entries_match_actor" in index_names
            engine.dispose()
        finally:
            os.unlink(db_path)

    def test_get_db_engine(self, db_path):
        """Test database engine creation with configuration."""
        config = {
            'db_path': db_path,
            'journal_mode': 'WAL',
            'synchronous': 'NORMAL',
            'foreign_keys': True,
            'temp_store': 'MEMORY'
        }
        engine = get_db_engine(config)

        try:
            assert os.path.exists(db_path)
            with engine.connect() as conn:
                assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
                assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        finally:
            engine.dispose()

    def test_match_with_entries(self, db_session):
        """Test the MatchRecord and CombatLogEntry models."""
        match = MatchRecord(match_id="test-match-1", event_count=2)
        db_session.add(match)
        db_session.add_all([
            CombatLogEntry(
                match_id="test-match-1", sequence=1, event_type="DAMAGE_DONE",
                timestamp=2000, actor="bane", target="mars", damage=30
            ),
            CombatLogEntry(
                match_id="test-match-1", sequence=0, event_type="ITEM_PURCHASED",
                timestamp=1000, actor="mars", item="tango"
            ),
        ])
        db_session.commit()

        queried_match = db_session.get(MatchRecord, "test-match-1")

        assert queried_match is not None
        assert queried_match.event_count == 2
        assert queried_match.created_at is not None

        # Entries come back in line order
        assert [entry.event_type for entry in queried_match.entries] == ["ITEM_PURCHASED", "DAMAGE_DONE"]
        assert queried_match.entries[0].match.match_id == "test-match-1"
        assert queried_match.entries[0].damage is None
        assert queried_match.entries[1].damage == 30
