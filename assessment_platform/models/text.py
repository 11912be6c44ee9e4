"""
Text checks shared by request models.

JSON allows escapes such as ``"\\ud800"`` that decode to lone surrogates.
Python keeps them in ``str`` but they cannot be encoded as UTF-8, so they are
rejected when a request is parsed rather than failing later on write or render.
"""
from typing import Any, Optional

from pydantic import BaseModel, model_validator


def find_unencodable(value: Any, path: str = "") -> Optional[str]:
    """Path of the first string (or mapping key) UTF-8 cannot encode, or None."""
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            return path or "value"
        return None

    if isinstance(value, dict):
        for key, item in value.items():
            key_path = f"{path}.{key}" if path else str(key)
            if isinstance(key, str) and find_unencodable(key) is not None:
                return path or "key"
            found = find_unencodable(item, key_path)
            if found:
                return found
        return None

    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            found = find_unencodable(item, f"{path}.{index}" if path else str(index))
            if found:
                return found
    return None


class EncodableText(BaseModel):
    """Base for request bodies: every string must be encodable as UTF-8."""

    @model_validator(mode="before")
    @classmethod
    def reject_unencodable_text(cls, data: Any) -> Any:
        field = find_unencodable(data) if isinstance(data, dict) else None
        if field:
            raise ValueError(f"{field} contains characters that cannot be encoded as UTF-8")
        return data
