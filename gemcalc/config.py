from __future__ import annotations

import os

from .methods import GematriaMethod

_TRUTHY = {"1", "true", "yes", "y", "on"}

def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY

class Config:
    """
    Defaults for the CLI and the HTTP API, read from the environment.

    Explicit command-line flags and query parameters always win.
    """

    def __init__(self):
        self.METHOD = os.getenv("GEMCALC_METHOD", GematriaMethod.MISPAR_HECHRECHI.value)
        self.CACHE = _env_flag("GEMCALC_CACHE", True)
        self.PRESERVE_VOWELS = _env_flag("GEMCALC_PRESERVE_VOWELS", False)
        self.HOST = os.getenv("HOST", "127.0.0.1")
        self.PORT = int(os.getenv("PORT", "8000"))

    @property
    def method(self) -> GematriaMethod:
        # raises ValueError on a name that isn't a GematriaMethod at all
        return GematriaMethod(self.METHOD.strip().lower())
