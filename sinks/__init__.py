"""Configured sinks: switch and speaker configuration library."""
from .status_client import SwitchStatusClient
from .models import Switch, Speaker, Document, Indices, SwitchStatus, UNASSIGNED
from .validators import validate_switch, validate_speaker, format_errors

__all__ = [
    "SwitchStatusClient",
    "Switch",
    "Speaker",
    "Document",
    "Indices",
    "SwitchStatus",
    "UNASSIGNED",
    "validate_switch",
    "validate_speaker",
    "format_errors",
]
