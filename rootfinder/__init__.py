__version__ = "1.0.0"

import importlib as _importlib

# Import from modules
from .errors import *
from .solver import *

# List of modules not explicitly imported above
modules = ["errors", "fzero", "precision", "solver"]

__all__ = modules + [
    k for (k, v) in locals().items() if not k.startswith("_") and k != "modules" and k not in modules
]  # all local, public names


def __dir__():
    return __all__


# Lazy load of modules
def __getattr__(name):
    if name in modules:
        return _importlib.import_module(f"rootfinder.{name}")
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(f"Module 'rootfinder' has no attribute '{name}'")
