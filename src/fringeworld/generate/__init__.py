""" Procedural galaxy generation """

from .core import GalaxyConfig, GalaxyConfigError, GalaxyGenerator, GalaxyGeneratorObserver, GenerationStep, ProgressObserver
from .names import NameGenerator
from fringeworld.core import GenerationError, GenerationErrorCase
