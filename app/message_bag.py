"""
Catalog API — Message Bag
===========================

What:  Field-keyed container of validation messages (field → [messages]).
How:   Thin ordered wrapper over a dict of lists; insertion order of fields
       and of messages within a field is preserved.
Who:   ValidationError carries one; the response builder flattens it to a
       plain dict when formatting `errors`.
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

# Location prefixes pydantic/FastAPI put in front of the field path
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


class MessageBag:
    """
    Ordered collection of error messages grouped by field name.

    Example:
        bag = MessageBag()
        bag.add("email", "The email field is required.")
        bag.to_dict()  # {"email": ["The email field is required."]}
    """

    def __init__(self, messages: Optional[Mapping[str, Iterable[str]]] = None):
        self._messages: Dict[str, List[str]] = {}
        if messages:
            self.merge(messages)

    def add(self, key: str, message: str) -> "MessageBag":
        """Append a message under `key`; duplicates for the same key are skipped."""
        bucket = self._messages.setdefault(key, [])
        if message not in bucket:
            bucket.append(message)
        return self

    def merge(self, messages: "Mapping[str, Iterable[str]] | MessageBag") -> "MessageBag":
        if isinstance(messages, MessageBag):
            messages = messages.to_dict()
        for key, items in messages.items():
            if isinstance(items, str):
                self.add(key, items)
                continue
            for item in items:
                self.add(key, item)
        return self

    def has(self, key: str) -> bool:
        return bool(self._messages.get(key))

    def first(self, key: Optional[str] = None) -> str:
        """First message for `key`, or the first message overall; "" if none."""
        if key is not None:
            items = self._messages.get(key) or []
            return items[0] if items else ""
        for items in self._messages.values():
            if items:
                return items[0]
        return ""

    def get(self, key: str) -> List[str]:
        return list(self._messages.get(key, []))

    def keys(self) -> List[str]:
        return list(self._messages.keys())

    def is_empty(self) -> bool:
        return not any(self._messages.values())

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: list(items) for key, items in self._messages.items()}

    def __len__(self) -> int:
        return sum(len(items) for items in self._messages.values())

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __repr__(self) -> str:
        return f"MessageBag({self._messages!r})"

    @classmethod
    def from_pydantic(cls, errors: Sequence[Mapping[str, Any]]) -> "MessageBag":
        """
        Build a bag from pydantic / FastAPI error dicts.

        The leading request location ("body", "query", ...) is dropped and the
        rest of `loc` is joined with dots:
            {"loc": ("body", "price"), "msg": "Input should be greater than 0"}
            → {"price": ["Input should be greater than 0"]}

        Errors on the whole body (loc == ("body",)) and unparseable JSON
        (type "json_invalid", whose loc ends in a character offset) are filed
        under "general".
        """
        bag = cls()
        for error in errors:
            loc = [str(part) for part in error.get("loc", ())]
            if loc and loc[0] in _LOCATION_PREFIXES:
                loc = loc[1:]
            if not loc or error.get("type") == "json_invalid":
                key = "general"
            else:
                key = ".".join(loc)
            bag.add(key, str(error.get("msg", "Invalid value")))
        return bag
