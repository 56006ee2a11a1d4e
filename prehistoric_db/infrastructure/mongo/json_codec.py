"""Snapshot file codec: MongoDB Relaxed Extended JSON.

ObjectId and datetime values are written as {"$oid": ...} / {"$date": ...}
so they come back as the same BSON types on restore. Plain JSON arrays
(e.g. written by other tools) load as ordinary dicts.
"""

from typing import Any

from bson import json_util
from bson.json_util import RELAXED_JSON_OPTIONS


def dumps_documents(documents: list[dict[str, Any]]) -> str:
    """Serialize a list of documents as an indented JSON array."""
    return json_util.dumps(documents, json_options=RELAXED_JSON_OPTIONS, indent=2)


def loads_documents(text: str) -> list[dict[str, Any]]:
    """Parse a snapshot collection file.

    Raises:
        ValueError: If the text is not JSON, the top level is not an array,
            or an element of the array is not a document.
    """
    data = json_util.loads(text, json_options=RELAXED_JSON_OPTIONS)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(
                f"Expected a document at index {index}, got {type(item).__name__}"
            )
    return data
