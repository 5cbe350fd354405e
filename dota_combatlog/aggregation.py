"""Aggregations over the events of a single match.

All functions are pure: they only read the events they are given and return
new lists. Groups are reported in the order their key first appears in the
input, which keeps results deterministic for a fixed event order.
"""
from typing import Dict, Iterable, List, NamedTuple

from dota_combatlog.events import Event, EventKind


class HeroKills(NamedTuple):
    hero: str
    kills: int


class HeroItem(NamedTuple):
    item: str
    timestamp: int


class HeroSpells(NamedTuple):
    spell: str
    casts: int


class HeroDamage(NamedTuple):
    """Damage one attacker dealt to the queried hero."""
    other_actor: str
    damage_instances: int
    total_damage: int


def kill_counts(events: Iterable[Event]) -> List[HeroKills]:
    """Count hero kills per killer."""
    counts: Dict[str, int] = {}
    for event in events:
        if event.kind is not EventKind.HERO_KILLED:
            continue
        counts[event.actor] = counts.get(event.actor, 0) + 1
    return [HeroKills(hero, kills) for hero, kills in counts.items()]


def items_for(events: Iterable[Event], hero: str) -> List[HeroItem]:
    """List every item purchase of ``hero`` in source order."""
    return [
        HeroItem(event.item, event.timestamp)
        for event in events
        if event.kind is EventKind.ITEM_PURCHASED and event.actor == hero
    ]


def spells_for(events: Iterable[Event], hero: str) -> List[HeroSpells]:
    """Count how often ``hero`` cast each ability."""
    casts: Dict[str, int] = {}
    for event in events:
        if event.kind is not EventKind.SPELL_CAST or event.actor != hero:
            continue
        casts[event.ability] = casts.get(event.ability, 0) + 1
    return [HeroSpells(spell, count) for spell, count in casts.items()]


def damage_on(events: Iterable[Event], hero: str) -> List[HeroDamage]:
    """Group the damage ``hero`` received by attacker.

    Events without an actor are ignored.
    """
    # attacker -> [instances, total damage]
    totals: Dict[str, List[int]] = {}
    for event in events:
        if event.kind is not EventKind.DAMAGE_DONE or event.target != hero:
            continue
        if event.actor is None:
            continue
        bucket = totals.setdefault(event.actor, [0, 0])
        bucket[0] += 1
        bucket[1] += event.damage
    return [
        HeroDamage(actor, instances, total)
        for actor, (instances, total) in totals.items()
    ]
