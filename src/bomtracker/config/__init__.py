"""Configuration utilities for the bill-of-materials tracker."""

from .policies import Policies, ShellPolicy, StructurePolicy, load_policies
from .settings import PathsConfig, Settings, get_settings

__all__ = [
    "Settings",
    "PathsConfig",
    "get_settings",
    "Policies",
    "load_policies",
    "ShellPolicy",
    "StructurePolicy",
]
