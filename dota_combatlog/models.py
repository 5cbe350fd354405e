"""Database models for the Dota combat log analyzer."""
from typing import Dict, Any
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Index,
    create_engine, event, text
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class MatchRecord(Base):
    """Match table storing one row per ingested combat log."""
    __tablename__ = 'matches'

    match_id = Column(String, primary_key=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    event_count = Column(Integer, nullable=False, default=0)

    # Relationships
    entries = relationship(
        "CombatLogEntry",
        back_populates="match",
        cascade="all, delete-orphan",
        order_by="CombatLogEntry.sequence",
    )


class CombatLogEntry(Base):
    """Combat log entry table storing every parsed event.

    Only the columns belonging to ``event_type`` are populated, the rest stay NULL.
    """
    __tablename__ = 'combat_log_entries'

    entry_id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(String, ForeignKey('matches.match_id'), nullable=False)
    sequence = Column(Integer, nullable=False)  # Line order within the match
    event_type = Column(String, nullable=False)
    timestamp = Column(Integer, nullable=False, default=0)  # Milliseconds
    actor = Column(String, nullable=True)
    target = Column(String, nullable=True)
    ability = Column(String, nullable=True)
    ability_level = Column(Integer, nullable=True)
    item = Column(String, nullable=True)
    damage = Column(Integer, nullable=True)

    # Relationships
    match = relationship("MatchRecord", back_populates="entries")

    __table_args__ = (
        Index('ix_combat_log_entries_match_actor', 'match_id', 'actor'),
    )


def init_db(engine_url: str) -> None:
    """Initialize the database with the schema."""
    engine = create_engine(engine_url)
    Base.metadata.create_all(engine)
    engine.dispose()


def get_db_engine(config: Dict[str, Any]) -> Any:
    """Create a SQLite database engine with the appropriate configuration."""
    db_path = config['db_path']
    engine = create_engine(f"sqlite:///{db_path}")

    pragmas = [
        f"PRAGMA journal_mode = {config['journal_mode']}",
        f"PRAGMA synchronous = {config['synchronous']}",
        f"PRAGMA foreign_keys = {'ON' if config['foreign_keys'] else 'OFF'}",
        f"PRAGMA temp_store = {config['temp_store']}",
    ]

    # Pragmas are per connection, so apply them to every pooled connection
    @event.listens_for(engine, "connect")
    def _set_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        for pragma in pragmas:
            cursor.execute(pragma)
        cursor.close()

    # Touch the database so the file exists once the engine is returned
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    return engine
