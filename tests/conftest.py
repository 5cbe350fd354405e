"""Configuration for pytest."""
import os
import tempfile
import pytest
from sqlalchemy import create_engine

from dota_combatlog.parser import CombatLogParser
from dota_combatlog.repository import InMemoryMatchRepository, SqlMatchRepository
from dota_combatlog.service import MatchService


SAMPLE_LOG = """\
[00:00:04.999] game state is now 2
[00:08:46.693] npc_dota_hero_snapfire buys item item_clarity
[00:08:47.100] npc_dota_hero_mars buys item item_tango
[00:10:42.031] npc_dota_hero_snapfire casts ability snapfire_scatterblast (lvl 1) on npc_dota_hero_mars
[00:10:42.500] npc_dota_hero_snapfire hits npc_dota_hero_mars with 120 damage
[00:10:43.000] npc_dota_hero_bane hits npc_dota_hero_mars with 40 damage
[00:10:44.000] npc_dota_hero_snapfire hits npc_dota_hero_mars with 80 damage
[00:10:45.000] npc_dota_hero_snapfire casts ability snapfire_firesnap_cookie (lvl 1) on npc_dota_hero_snapfire
[00:10:46.000] npc_dota_hero_snapfire casts ability snapfire_scatterblast (lvl 2) on npc_dota_hero_bane
garbage text not matching anything
[00:11:17.489] npc_dota_hero_snapfire kills npc_dota_hero_mars with snapfire_scatterblast Level 2
[00:12:00.000] npc_dota_hero_mars hits npc_dota_hero_snapfire with 300 damage
[00:12:30.500] npc_dota_hero_snapfire buys item item_clarity
[00:13:00.000] npc_dota_hero_bane kills npc_dota_hero_mars with bane_brain_sap Level 1
[00:14:00.000] npc_dota_hero_snapfire kills npc_dota_hero_bane with snapfire_mortimer_kisses Level 1
"""


@pytest.fixture
def sample_log_text():
    """Sample combat log content with one unrecognized line."""
    return SAMPLE_LOG


@pytest.fixture
def sample_log_file():
    """Create a sample combat log file for testing."""
    fd, path = tempfile.mkstemp(suffix='.log.txt')

    with os.fdopen(fd, 'w', encoding='utf-8') as f:
        f.write(SAMPLE_LOG)

    yield path

    # Clean up
    os.unlink(path)


@pytest.fixture
def db_path():
    """Path to a temporary SQLite database file."""
    fd, path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    yield path

    # Clean up
    for suffix in ("", "-wal", "-shm"):
        if os.path.exists(path + suffix):
            os.unlink(path + suffix)


@pytest.fixture
def db_engine(db_path):
    """Create a SQLAlchemy engine on a temporary database."""
    engine = create_engine(f"sqlite:///{db_path}")
    yield engine
    engine.dispose()


@pytest.fixture
def sql_repository(db_engine):
    """SQL repository with a small batch size so batching is exercised."""
    return SqlMatchRepository(db_engine, batch_size=3)


@pytest.fixture
def memory_repository():
    return InMemoryMatchRepository()


@pytest.fixture
def service(memory_repository):
    """Match service over an in-memory repository."""
    return MatchService(memory_repository, CombatLogParser())
