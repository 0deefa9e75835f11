"""User records: simple ``id`` key, listed through the TypeIndex."""

from typing import Any, Dict, List, Optional, cast

from ..models import EntityType, User
from ..utils.codec import compact
from ..utils.table_schemas import TYPE_INDEX
from ..utils.validation import require_fields
from .base import BaseRepository, store_operation


class UserRepository(BaseRepository):
    entity = "users"
    label = "User"

    @store_operation("Failed to create user")
    def create(self, data: Dict[str, Any]) -> User:
        require_fields(data, ["name", "username", "email"], self.label)
        now = self._now()
        user = compact(
            {
                "id": self._new_id(),
                "name": data["name"],
                "username": data["username"],
                "email": data["email"],
                "address": data.get("address"),
                "createdAt": now,
                "updatedAt": now,
                "type": EntityType.USER,
            }
        )
        self._put(user)
        self.logger.info("User created", userId=user["id"])
        return cast(User, user)

    @store_operation("Failed to get user")
    def get(self, user_id: str) -> Optional[User]:
        return cast(Optional[User], self._get({"id": user_id}))

    @store_operation("Failed to list users")
    def list(self) -> List[User]:
        return cast(List[User], self._query_index(TYPE_INDEX, "type", EntityType.USER))
