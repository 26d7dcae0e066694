from __future__ import annotations

from . import app, modules
from .modules.text.pipeline import correction as correction

__all__ = ["app", "correction", "modules"]
