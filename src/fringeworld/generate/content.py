""" System types, names, metrics and tags """

import logging
from typing import Dict, Mapping, Set

import numpy as np

from fringeworld import core, util, config
from fringeworld.core import tags, SystemType, SystemMetrics
from .names import NameGenerator

logger = logging.getLogger(__name__)

CAPITAL_STABILITY = 5
CAPITAL_SECURITY = 4
CAPITAL_ECONOMY = 4
CAPITAL_ENFORCEMENT = 4
CAPITAL_CRIME = 1

FRONTIER_STABILITY_FLOOR = 1
FRONTIER_SECURITY_FLOOR = 0

CONTESTED_STABILITY = 1
CONTESTED_CRIME_BOOST = 2

def choose_system_type(r:np.random.Generator, type_weights:Mapping[SystemType, float]) -> SystemType:
    system_type = util.weighted_choice(r, list(type_weights.keys()), list(type_weights.values()))
    if system_type is None:
        return SystemType.OUTPOST
    return system_type

def assign_types(r:np.random.Generator, world:core.WorldGraph, capitals:Dict[str, int], type_weights:Mapping[SystemType, float]) -> None:
    """ capitals are stations, contested systems are contested, the rest draw
    from type_weights in id order """
    capital_ids = set(capitals.values())
    for system in world.systems():
        if system.system_id in capital_ids:
            system.system_type = SystemType.STATION
        elif system.has_tag(tags.CONTESTED):
            system.system_type = SystemType.CONTESTED
        else:
            system.system_type = choose_system_type(r, type_weights)

def unique_name(r:np.random.Generator, name_generator:NameGenerator, system_type:SystemType, used_names:Set[str], max_tries:int) -> str:
    tries = 0
    while True:
        name = name_generator.system_name(r, system_type)
        tries += 1
        if name not in used_names or tries >= max_tries:
            break

    if name in used_names:
        suffix = 2
        while f'{name} {suffix}' in used_names:
            suffix += 1
        name = f'{name} {suffix}'

    return name

def assign_names(r:np.random.Generator, world:core.WorldGraph, name_generator:NameGenerator, max_tries:int=0) -> None:
    if max_tries <= 0:
        max_tries = config.Settings.generate.names.MAX_NAME_TRIES
    used_names:Set[str] = set()
    for system in world.systems():
        system.name = unique_name(r, name_generator, system.system_type, used_names, max_tries)
        used_names.add(system.name)

def apply_metric_variance(r:np.random.Generator, metrics:SystemMetrics) -> None:
    # exactly five draws, in this order
    metrics.stability += int(r.integers(-1, 2))
    metrics.security_level += int(r.integers(-1, 2))
    metrics.criminal_activity += int(r.integers(-1, 2))
    metrics.economic_activity += int(r.integers(-1, 2))
    metrics.law_enforcement_presence += int(r.integers(-1, 2))

def initialize_metrics(r:np.random.Generator, world:core.WorldGraph, capitals:Dict[str, int]) -> None:
    """ archetype defaults, then capital boost, frontier penalty and
    contested penalty, then random variance, all clamped on every write """
    capital_ids = set(capitals.values())
    for system in world.systems():
        metrics = SystemMetrics.for_system_type(system.system_type)

        if system.system_id in capital_ids:
            metrics.stability = CAPITAL_STABILITY
            metrics.security_level = CAPITAL_SECURITY
            metrics.economic_activity = CAPITAL_ECONOMY
            metrics.law_enforcement_presence = CAPITAL_ENFORCEMENT
            metrics.criminal_activity = CAPITAL_CRIME

        if system.has_tag(tags.FRONTIER):
            metrics.stability = max(FRONTIER_STABILITY_FLOOR, metrics.stability - 1)
            metrics.security_level = max(FRONTIER_SECURITY_FLOOR, metrics.security_level - 1)

        if system.has_tag(tags.CONTESTED):
            metrics.stability = CONTESTED_STABILITY
            metrics.criminal_activity += CONTESTED_CRIME_BOOST

        apply_metric_variance(r, metrics)
        system.metrics = metrics

def derive_system_tags(system:core.StarSystem) -> None:
    """ adds archetype and metric driven tags, never removes any """
    metrics = system.metrics
    if system.system_type == SystemType.ASTEROID:
        system.add_tag(tags.MINING)
        if metrics.economic_activity >= 4:
            system.add_tag(tags.INDUSTRIAL)
    elif system.system_type == SystemType.DERELICT:
        system.add_tag(tags.FRONTIER)
    elif system.system_type == SystemType.NEBULA:
        if metrics.criminal_activity >= 3:
            system.add_tag(tags.LAWLESS)

    if metrics.security_level >= 4:
        system.add_tag(tags.MILITARY)
    if metrics.criminal_activity >= 4 and metrics.security_level <= 1:
        system.add_tag(tags.LAWLESS)
    if metrics.criminal_activity >= 5:
        system.add_tag(tags.PIRATE_HAVEN)

def assign_tags(world:core.WorldGraph) -> None:
    for system in world.systems():
        derive_system_tags(system)

def assign_content(r:np.random.Generator, world:core.WorldGraph, capitals:Dict[str, int], type_weights:Mapping[SystemType, float], name_generator:NameGenerator) -> None:
    assign_types(r, world, capitals, type_weights)
    assign_names(r, world, name_generator)
    initialize_metrics(r, world, capitals)
    assign_tags(world)

    type_counts:Dict[str, int] = {}
    for system in world.systems():
        type_counts[system.system_type.name] = type_counts.get(system.system_type.name, 0) + 1
    logger.info(f'assigned system content {type_counts}')
