# app/routers/__init__.py
from . import auth
from . import rental

__all__ = [
    "auth",
    "rental",
]
