from typing import Any, Mapping, Optional

REQUIRED_FIELDS = ("title", "author", "publishedYear")


class BookPayloadValidator:
    """Presence checks for create and update payloads.

    A field counts as present only when its value is truthy, so an empty
    string and a publishedYear of 0 are both treated as missing.
    """

    @staticmethod
    def missing_fields(payload: Optional[Mapping[str, Any]]) -> list[str]:
        if not payload:
            return list(REQUIRED_FIELDS)
        return [name for name in REQUIRED_FIELDS if not payload.get(name)]

    @staticmethod
    def has_required_fields(payload: Optional[Mapping[str, Any]]) -> bool:
        return not BookPayloadValidator.missing_fields(payload)
