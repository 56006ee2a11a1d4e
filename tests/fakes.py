"""In-memory stand-in for the slice of the motor database API the tools use.

Supports equality filters only. Documents are deep-copied on the way in and
out so tests cannot mutate stored state through returned references.
"""

import copy
from types import SimpleNamespace
from typing import Any

from bson import ObjectId
from pymongo.errors import CollectionInvalid, DuplicateKeyError, OperationFailure


def _matches(doc: dict[str, Any], flt: dict[str, Any] | None) -> bool:
    return all(doc.get(k) == v for k, v in (flt or {}).items())


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        docs = self._docs if length is None else self._docs[:length]
        return copy.deepcopy(docs)


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.indexes: dict[tuple, dict[str, Any]] = {}

    async def create_index(self, keys: list[tuple[str, Any]], **options: Any) -> str:
        key = tuple(keys)
        existing = self.indexes.get(key)
        if existing is not None and existing != options:
            raise OperationFailure("Index already exists with different options", code=85)
        self.indexes[key] = options
        return "_".join(f"{f}_{d}" for f, d in keys)

    def find(self, flt: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([d for d in self.documents if _matches(d, flt)])

    async def find_one(
        self, flt: dict[str, Any] | None = None, projection: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        for doc in self.documents:
            if _matches(doc, flt):
                if projection:
                    return {k: doc[k] for k in projection if k in doc}
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        if not isinstance(doc, dict):
            raise TypeError(f"document must be an instance of dict, not {type(doc)}")
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", ObjectId())
        if any(d["_id"] == doc["_id"] for d in self.documents):
            raise DuplicateKeyError(f"E11000 duplicate key: {doc['_id']}")
        self.documents.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def insert_many(self, docs: list[dict[str, Any]]) -> SimpleNamespace:
        ids = [(await self.insert_one(d)).inserted_id for d in docs]
        return SimpleNamespace(inserted_ids=ids)

    async def replace_one(
        self, flt: dict[str, Any], replacement: dict[str, Any], upsert: bool = False
    ) -> SimpleNamespace:
        for i, doc in enumerate(self.documents):
            if _matches(doc, flt):
                new_doc = copy.deepcopy(replacement)
                new_doc["_id"] = doc["_id"]
                self.documents[i] = new_doc
                return SimpleNamespace(matched_count=1, upserted_id=None)
        if not upsert:
            return SimpleNamespace(matched_count=0, upserted_id=None)
        result = await self.insert_one({**flt, **replacement})
        return SimpleNamespace(matched_count=0, upserted_id=result.inserted_id)

    async def update_one(
        self, flt: dict[str, Any], update: dict[str, Any], upsert: bool = False
    ) -> SimpleNamespace:
        for doc in self.documents:
            if _matches(doc, flt):
                doc.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, upserted_id=None)
        if not upsert:
            return SimpleNamespace(matched_count=0, upserted_id=None)
        new_doc = {**flt, **update.get("$set", {}), **update.get("$setOnInsert", {})}
        result = await self.insert_one(new_doc)
        return SimpleNamespace(matched_count=0, upserted_id=result.inserted_id)

    async def delete_many(self, flt: dict[str, Any]) -> SimpleNamespace:
        before = len(self.documents)
        self.documents = [d for d in self.documents if not _matches(d, flt)]
        return SimpleNamespace(deleted_count=before - len(self.documents))

    async def count_documents(self, flt: dict[str, Any]) -> int:
        return sum(1 for d in self.documents if _matches(d, flt))


class FakeDatabase:
    """Collections spring into existence on first access, as in MongoDB."""

    def __init__(self, name: str = "prehistoric_vr") -> None:
        self.name = name
        self.collections: dict[str, FakeCollection] = {}

    async def create_collection(self, name: str) -> FakeCollection:
        if name in self.collections:
            raise CollectionInvalid(f"collection {name} already exists")
        self.collections[name] = FakeCollection(name)
        return self.collections[name]

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    async def list_collection_names(self) -> list[str]:
        return sorted(self.collections)
