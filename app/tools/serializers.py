from typing import Any, Optional

from beanie import PydanticObjectId
from bson import ObjectId
from pydantic import BaseModel


def parse_object_id(value: Any) -> Optional[PydanticObjectId]:
    """Return the ObjectId for a client-supplied id, or None if it is malformed."""
    if value is None:
        return None
    if isinstance(value, ObjectId):
        return PydanticObjectId(value)
    value = str(value).strip()
    if not ObjectId.is_valid(value):
        return None
    return PydanticObjectId(value)


def to_json(obj: Any) -> Any:
    """Serialize pydantic models (or lists of them) into JSON-friendly data.

    Aliases are applied so `id` fields come out as MongoDB-style `_id`, and
    ObjectId/datetime values become strings.
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(by_alias=True, mode="json")
    if isinstance(obj, list):
        return [to_json(x) for x in obj]
    if isinstance(obj, dict):
        return {k: to_json(v) for k, v in obj.items()}
    return obj
