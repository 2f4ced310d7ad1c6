"""Completion proxy: the server side of ``POST /api/chat``.

Module structure:
- config.py: environment settings and fixed response texts
- routing.py: logical model names and upstream identifiers
- service.py: request validation and the degrade-on-failure policy
- app.py: FastAPI wiring
"""

from .app import create_app
from .config import ProxySettings
from .routing import FALLBACK_MODELS, MODEL_MAP, UnknownModelError, fallback_models, resolve_model
from .service import ChatProxy

__all__ = [
    "ChatProxy",
    "FALLBACK_MODELS",
    "MODEL_MAP",
    "ProxySettings",
    "UnknownModelError",
    "create_app",
    "fallback_models",
    "resolve_model",
]
