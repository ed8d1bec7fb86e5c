from datetime import datetime, timezone
from typing import List, Optional

from beanie import PydanticObjectId
from app.schemas.documents import UserDoc, ResumeDoc, ShortlistedJobDoc


async def get_user_by_id(user_id: PydanticObjectId) -> Optional[UserDoc]:
    return await UserDoc.get(user_id)


async def get_user_by_email(email: str) -> Optional[UserDoc]:
    return await UserDoc.find_one({"email": email})


async def create_user(name: str, email: str, password_hash: str) -> UserDoc:
    user = UserDoc(name=name, email=email, password=password_hash)
    await user.insert()
    return user


async def add_reference(user_id: PydanticObjectId, field: str, ref_id: PydanticObjectId) -> None:
    """Append ref_id to one of the user's reference arrays.

    $addToSet keeps the write idempotent, so replaying it never duplicates an id.
    """
    await UserDoc.find_many({"_id": user_id}).update(
        {
            "$addToSet": {field: ref_id},
            "$set": {"updatedAt": datetime.now(timezone.utc)},
        }
    )


async def remove_reference(user_id: PydanticObjectId, field: str, ref_id: PydanticObjectId) -> None:
    await UserDoc.find_many({"_id": user_id}).update(
        {
            "$pull": {field: ref_id},
            "$set": {"updatedAt": datetime.now(timezone.utc)},
        }
    )


def in_id_order(docs: list, ids: List[PydanticObjectId]) -> list:
    """Order `docs` as `ids` lists them; ids with no document are dropped."""
    by_id = {doc.id: doc for doc in docs}
    return [by_id[i] for i in ids if i in by_id]


async def get_resumes_by_ids(ids: List[PydanticObjectId]) -> List[ResumeDoc]:
    if not ids:
        return []
    docs = await ResumeDoc.find_many({"_id": {"$in": list(ids)}}).to_list()
    return in_id_order(docs, ids)


async def get_shortlisted_by_ids(ids: List[PydanticObjectId]) -> List[ShortlistedJobDoc]:
    if not ids:
        return []
    docs = await ShortlistedJobDoc.find_many({"_id": {"$in": list(ids)}}).to_list()
    return in_id_order(docs, ids)
