"""
Type definitions for AppSync Lambda events.

Provides TypedDict definitions for the direct Lambda resolver event and
helpers for safely extracting identity, routing info and arguments.
"""

from typing import Any, Dict, List, Tuple, TypedDict

from .errors import invalid_input


class AppSyncIdentity(TypedDict, total=False):
    """AppSync Cognito User Pool identity."""

    sub: str  # Cognito user ID
    username: str
    claims: Dict[str, Any]
    sourceIp: List[str]
    defaultAuthStrategy: str


class AppSyncInfo(TypedDict, total=False):
    """Field being resolved."""

    fieldName: str
    parentTypeName: str
    variables: Dict[str, Any]
    selectionSetList: List[str]
    selectionSetGraphQL: str


class AppSyncEvent(TypedDict, total=False):
    """Direct Lambda resolver event structure."""

    arguments: Dict[str, Any]
    identity: AppSyncIdentity
    source: Dict[str, Any]
    info: AppSyncInfo
    request: Dict[str, Any]
    prev: Dict[str, Any]


def get_field(event: Dict[str, Any]) -> Tuple[str, str]:
    """
    Extract the (parentTypeName, fieldName) pair being resolved.

    Missing values come back as empty strings so routing can report them.
    """
    info: Dict[str, Any] = event.get("info") or {}
    return str(info.get("parentTypeName") or ""), str(info.get("fieldName") or "")


def get_identity(event: Dict[str, Any]) -> AppSyncIdentity:
    """Return the caller identity (empty for unauthenticated calls)."""
    identity: AppSyncIdentity = event.get("identity") or {}
    return identity


def get_argument(event: Dict[str, Any], name: str, default: Any = None) -> Any:
    """
    Extract an argument from the event.

    Args:
        event: AppSync event
        name: Argument name
        default: Default value if not present

    Returns:
        Argument value or default
    """
    return (event.get("arguments") or {}).get(name, default)


def get_argument_required(event: Dict[str, Any], name: str) -> Any:
    """
    Extract a required argument from the event.

    Raises:
        AppError: INVALID_INPUT if the argument is missing
    """
    value = get_argument(event, name)
    if value is None:
        raise invalid_input(f"Argument '{name}' is required")
    return value


def get_input(event: Dict[str, Any]) -> Dict[str, Any]:
    """Extract the ``input`` object argument used by create/update mutations."""
    value = get_argument_required(event, "input")
    if not isinstance(value, dict):
        raise invalid_input("Argument 'input' must be an object")
    return value
