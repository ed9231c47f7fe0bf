"""Validation rules for switches and speakers.

Validators are pure: they take the candidate and a snapshot of the existing
entities and return an ordered list of human-readable messages. An empty list
means the candidate may be persisted.
"""
import ipaddress
import re
from typing import Iterable, Optional

from .models import UNASSIGNED, Speaker, SpeakerCommand, Switch, SwitchCommand

NAME_MIN_LENGTH = 5
NAME_MAX_LENGTH = 30

MAC_PATTERN = re.compile(r"^([0-9A-Fa-f]{2}[:-]?){5}([0-9A-Fa-f]{2})$")

MSG_NAME_LENGTH = f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters."
MSG_NAME_TAKEN = "Name is not unique."
MSG_IP_INVALID = "IP is not valid ipv4 address."
MSG_IP_TAKEN = "IP is already assigned."
MSG_MAC_INVALID = "MAC is not valid."
MSG_MAC_TAKEN = "MAC is already assigned."
MSG_SWITCH_MISSING = "Switch does not exist."


def is_valid_ipv4(value: str) -> bool:
    """Check for a dotted-quad IPv4 literal."""
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_valid_mac(value: str) -> bool:
    """Check for six hex octets, optionally separated by ':' or '-'."""
    return bool(MAC_PATTERN.match(value))


def normalize_mac(value: str) -> str:
    """Normalize a MAC address for comparison (uppercase, no separators)."""
    return re.sub(r"[:-]", "", value.strip()).upper()


def _others(entities: Iterable, exclude_id: Optional[int]) -> list:
    return [e for e in entities if exclude_id is None or e.id != exclude_id]


def _check_name(name: str, others: list) -> list[str]:
    name = (name or "").strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        return [MSG_NAME_LENGTH]
    if any(e.name.strip() == name for e in others):
        return [MSG_NAME_TAKEN]
    return []


def validate_switch(
    candidate: SwitchCommand,
    existing: Iterable[Switch],
    exclude_id: Optional[int] = None
) -> list[str]:
    """
    Validate a switch before it is persisted.

    Args:
        candidate: Submitted switch values
        existing: Switches currently in the document
        exclude_id: Id of the switch being edited, ignored in uniqueness checks

    Returns:
        Ordered list of violation messages (empty if valid)
    """
    others = _others(existing, exclude_id)
    errors = _check_name(candidate.name, others)

    ip = (candidate.ip or "").strip()
    if not is_valid_ipv4(ip):
        errors.append(MSG_IP_INVALID)
    elif any(sw.ip.strip() == ip for sw in others):
        errors.append(MSG_IP_TAKEN)

    mac = (candidate.mac or "").strip()
    if not is_valid_mac(mac):
        errors.append(MSG_MAC_INVALID)
    elif any(sw.mac and normalize_mac(sw.mac) == normalize_mac(mac) for sw in others):
        errors.append(MSG_MAC_TAKEN)

    return errors


def validate_speaker(
    candidate: SpeakerCommand,
    existing: Iterable[Speaker],
    switches: Iterable[Switch],
    exclude_id: Optional[int] = None
) -> list[str]:
    """
    Validate a speaker before it is persisted.

    Name rules match the switch rules; a bound switch must exist.
    """
    errors = _check_name(candidate.name, _others(existing, exclude_id))
    if candidate.sw != UNASSIGNED and not any(sw.id == candidate.sw for sw in switches):
        errors.append(MSG_SWITCH_MISSING)
    return errors


def format_errors(messages: list[str]) -> str:
    """Render violation messages for a toast (one per line)."""
    return "<div>" + "".join(f"{msg}<br />" for msg in messages) + "</div>"
