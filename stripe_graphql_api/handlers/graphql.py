"""
Lambda entry point for the AppSync GraphQL data source.

The store client, repositories and router are built on the first
invocation and reused for the lifetime of the Lambda process.
"""

from typing import Any, Optional

from ..utils.appsync_types import AppSyncEvent, get_field
from ..utils.config import Settings
from ..utils.errors import AppError
from ..utils.logging import bind_correlation_id, get_correlation_id, get_logger
from .router import Router, Services

logger = get_logger(__name__)

_services: Optional[Services] = None
_router: Optional[Router] = None


def get_services() -> Services:
    """Process-scoped services, built from the environment on first use."""
    global _services
    if _services is None:
        _services = Services.from_settings(Settings.from_env())
    return _services


def set_services(services: Services) -> None:
    """Replace the process-scoped services (used by tests)."""
    global _services, _router
    _services = services
    _router = None


def reset_services() -> None:
    """Drop cached services so the next invocation rebuilds them."""
    global _services, _router
    _services = None
    _router = None


def _get_router() -> Router:
    global _router
    if _router is None:
        _router = Router(get_services())
    return _router


def handler(event: AppSyncEvent, context: Any) -> Any:
    """
    Resolve one GraphQL field.

    Args:
        event: AppSync direct Lambda resolver event
        context: Lambda context (unused)

    Returns:
        The field's value

    Raises:
        AppError: Returned to the GraphQL caller as the field error message
    """
    bind_correlation_id(get_correlation_id(dict(event)))
    parent_type, field_name = get_field(event)
    logger.info("Resolving field", parentTypeName=parent_type, fieldName=field_name)

    try:
        result = _get_router().dispatch(event)
    except AppError as e:
        logger.error("Resolver failed", parentTypeName=parent_type, fieldName=field_name, error=e.to_dict())
        raise
    except Exception as e:
        logger.error(
            "Unexpected resolver error", parentTypeName=parent_type, fieldName=field_name, error=str(e)
        )
        raise

    logger.info("Resolved field", parentTypeName=parent_type, fieldName=field_name)
    return result
