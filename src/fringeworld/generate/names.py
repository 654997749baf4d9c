""" Themed names for systems, stations and sectors.

All draws come from the caller's random generator, in a fixed order per
name, so names are part of the deterministic generation stream.
"""

from typing import Any, Mapping, Optional, Sequence

import numpy as np

from fringeworld import config
from fringeworld.core import SystemType

class NameGenerator:
    @staticmethod
    def load(filename:str="names.toml") -> "NameGenerator":
        return NameGenerator(config.read_data(filename))

    def __init__(self, pools:Mapping[str, Any], prefix_chance:Optional[float]=None, suffix_chance:Optional[float]=None, station_match_chance:Optional[float]=None) -> None:
        self.system_prefixes:Sequence[str] = pools["SYSTEM_PREFIXES"]
        self.system_names:Sequence[str] = pools["SYSTEM_NAMES"]
        self.system_suffixes:Sequence[str] = pools["SYSTEM_SUFFIXES"]
        self.derelict_prefixes:Sequence[str] = pools["DERELICT_PREFIXES"]
        self.asteroid_names:Sequence[str] = pools["ASTEROID_NAMES"]
        self.nebula_names:Sequence[str] = pools["NEBULA_NAMES"]
        self.station_suffixes:Sequence[str] = pools["STATION_SUFFIXES"]
        self.sector_prefixes:Sequence[str] = pools["SECTOR_PREFIXES"]
        self.sector_names:Sequence[str] = pools["SECTOR_NAMES"]

        names_config = config.Settings.generate.names
        self.prefix_chance = prefix_chance if prefix_chance is not None else names_config.STANDARD_PREFIX_CHANCE
        self.suffix_chance = suffix_chance if suffix_chance is not None else names_config.STANDARD_SUFFIX_CHANCE
        self.station_match_chance = station_match_chance if station_match_chance is not None else names_config.STATION_MATCHES_SYSTEM_CHANCE

        for pool_name, pool in [("SYSTEM_NAMES", self.system_names), ("SYSTEM_SUFFIXES", self.system_suffixes), ("STATION_SUFFIXES", self.station_suffixes)]:
            if len(pool) == 0:
                raise ValueError(f'name pool {pool_name} is empty')

    def _pick(self, r:np.random.Generator, pool:Sequence[str]) -> str:
        return pool[int(r.integers(len(pool)))]

    def system_name(self, r:np.random.Generator, system_type:SystemType) -> str:
        if system_type == SystemType.DERELICT:
            return self.derelict_name(r)
        elif system_type == SystemType.ASTEROID:
            return self.asteroid_name(r)
        elif system_type == SystemType.NEBULA:
            return self.nebula_name(r)
        else:
            return self.standard_name(r)

    def standard_name(self, r:np.random.Generator) -> str:
        """ a base name, sometimes with a prefix and/or suffix

        Both rolls happen up front, then the base, then prefix and suffix only
        if they were rolled. """
        use_prefix = r.uniform() < self.prefix_chance
        use_suffix = r.uniform() < self.suffix_chance

        name = self._pick(r, self.system_names)
        if use_prefix:
            name = f'{self._pick(r, self.system_prefixes)} {name}'
        if use_suffix:
            name = f'{name} {self._pick(r, self.system_suffixes)}'
        return name

    def derelict_name(self, r:np.random.Generator) -> str:
        prefix = self._pick(r, self.derelict_prefixes)
        name = self._pick(r, self.system_names)
        return f'{prefix} {name}'

    def asteroid_name(self, r:np.random.Generator) -> str:
        name = self._pick(r, self.asteroid_names)
        suffix = self._pick(r, self.system_suffixes)
        return f'{name} {suffix}'

    def nebula_name(self, r:np.random.Generator) -> str:
        # the cloud word is drawn first but goes last
        cloud = self._pick(r, self.nebula_names)
        base = self._pick(r, self.system_names)
        return f'{base} {cloud}'

    def station_name(self, r:np.random.Generator, system_name:str) -> str:
        if r.uniform() < self.station_match_chance:
            return system_name

        suffix = self._pick(r, self.station_suffixes)
        # avoid "Haven Station Station"
        for existing in self.system_suffixes:
            if system_name.endswith(existing):
                system_name = system_name[:-len(existing)].rstrip()
                break
        return f'{system_name} {suffix}'

    def sector_name(self, r:np.random.Generator) -> str:
        prefix = self._pick(r, self.sector_prefixes)
        name = self._pick(r, self.sector_names)
        return f'{prefix} {name}'
