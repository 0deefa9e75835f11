"""
Shared DynamoDB access for the entity repositories.

Every public repository operation is wrapped by ``store_operation`` so that a
failing store call reaches the caller as exactly one ``AppError`` carrying
the store's message (or a fixed fallback such as "Failed to create user").
Attribute values the codec cannot encode, such as numbers outside the
store's range, fail the same way with the fallback message.
Nothing is retried.
"""

import decimal
import functools
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from ..utils.codec import decode, encode, encode_values
from ..utils.dynamodb import StoreClient
from ..utils.errors import AppError, ErrorCode, not_found
from ..utils.ids import new_id
from ..utils.logging import get_logger

F = TypeVar("F", bound=Callable[..., Any])


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def _error_message(error: Exception) -> str:
    if isinstance(error, ClientError):
        return str(error.response.get("Error", {}).get("Message") or "")
    return str(error)


def store_operation(fallback_message: str) -> Callable[[F], F]:
    """
    Convert any store failure inside a repository method into an AppError.

    Args:
        fallback_message: Message used when the underlying error has none
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self: "BaseRepository", *args: Any, **kwargs: Any) -> Any:
            try:
                return func(self, *args, **kwargs)
            except AppError:
                raise
            except (ClientError, BotoCoreError) as e:
                message = _error_message(e) or fallback_message
                self.logger.error(fallback_message, error=message, table=self.table_name)
                raise AppError(ErrorCode.DATABASE_ERROR, message) from e
            except (TypeError, decimal.DecimalException) as e:
                # Values the codec cannot represent never reach the table
                self.logger.error(fallback_message, error=str(e) or type(e).__name__, table=self.table_name)
                raise AppError(ErrorCode.DATABASE_ERROR, fallback_message) from e

        return wrapper  # type: ignore[return-value]

    return decorator


class BaseRepository:
    """Common read/write helpers over one DynamoDB table."""

    # Logical table ("users", "orders", ...) and display name ("User", "Order", ...)
    entity = ""
    label = ""
    # Attribute that must exist for an update to apply
    key_attribute = "id"

    def __init__(
        self,
        store: StoreClient,
        clock: Callable[[], str] = utc_now_iso,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.store = store
        self.client = store.client
        self.table_name = store.table_name(self.entity)
        self._clock = clock
        self._id_factory = id_factory
        self.logger = get_logger(type(self).__module__)

    def _now(self) -> str:
        return self._clock()

    def _new_id(self) -> str:
        return self._id_factory()

    def _put(self, record: Dict[str, Any]) -> None:
        """Unconditional write; an identifier collision overwrites."""
        self.client.put_item(TableName=self.table_name, Item=encode(record))

    def _get(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        response = self.client.get_item(TableName=self.table_name, Key=encode(key))
        item = response.get("Item")
        return decode(item) if item else None

    def _delete(self, key: Dict[str, str]) -> None:
        self.client.delete_item(TableName=self.table_name, Key=encode(key))

    def _query_index(self, index_name: str, attribute: str, value: Any) -> List[Dict[str, Any]]:
        """Return every item in ``index_name`` whose ``attribute`` equals ``value``."""
        paginator = self.client.get_paginator("query")
        pages = paginator.paginate(
            TableName=self.table_name,
            IndexName=index_name,
            KeyConditionExpression="#key = :value",
            ExpressionAttributeNames={"#key": attribute},
            ExpressionAttributeValues=encode_values({":value": value}),
        )
        return [decode(item) for page in pages for item in page.get("Items", [])]

    def _update(
        self,
        key: Dict[str, str],
        changes: Dict[str, Any],
        remove: Iterable[str] = (),
    ) -> Dict[str, Any]:
        """
        Apply a partial update and return the full updated record.

        Only attributes with a non-None value in ``changes`` are written;
        ``updatedAt`` is always refreshed. Every attribute name goes through
        a ``#placeholder`` so reserved words (status, name, type) are safe.

        Raises:
            AppError: NOT_FOUND if the record does not exist
        """
        fields = {name: value for name, value in changes.items() if value is not None}
        fields["updatedAt"] = self._now()

        names = {f"#{name}": name for name in fields}
        values = {f":{name}": value for name, value in fields.items()}
        expression = "SET " + ", ".join(f"#{name} = :{name}" for name in fields)

        removed = [name for name in remove if name not in fields]
        if removed:
            names.update({f"#{name}": name for name in removed})
            expression += " REMOVE " + ", ".join(f"#{name}" for name in removed)

        names["#pk"] = self.key_attribute

        try:
            response = self.client.update_item(
                TableName=self.table_name,
                Key=encode(key),
                UpdateExpression=expression,
                ConditionExpression="attribute_exists(#pk)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=encode_values(values),
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise not_found(self.label) from e
            raise

        attributes = response.get("Attributes")
        if not attributes:
            raise not_found(self.label)
        return decode(attributes)

    def _delete_existing(self, key: Dict[str, str], **details: Any) -> Dict[str, Any]:
        """Read, then delete; returns the pre-deletion record."""
        current = self._get(key)
        if current is None:
            raise not_found(self.label, **details)
        self._delete(key)
        return current
