"""Priority-ordered filter and action hooks with mutation-safe dispatch."""

from .config import HooksConfig, load_effective_config
from .facade import Hooks
from .registry import HookRegistry
from .table import HookTable

__all__ = ["HookRegistry", "HookTable", "Hooks", "HooksConfig", "load_effective_config"]
