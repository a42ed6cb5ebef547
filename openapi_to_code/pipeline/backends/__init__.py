"""
Code generation backends.

Each backend renders one kind of output file through Jinja2 templates.
"""

from __future__ import annotations

from .base import GENERATION_COMMENT, TemplateBackend
from .client_backend import ClientBackend, GeneratedClient
from .types_backend import TypesBackend

__all__ = [
    "TemplateBackend",
    "TypesBackend",
    "ClientBackend",
    "GeneratedClient",
    "GENERATION_COMMENT",
]
