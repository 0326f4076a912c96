# ruff: noqa: F401
from . import cat, stat
