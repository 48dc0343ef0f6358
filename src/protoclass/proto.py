"""Delegating records: own storage plus a single prototype link."""

from typing import Any, Dict, Iterator, List, Optional, Tuple


class _Missing:
    """Result of a lookup that found nothing (singleton)."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class ProtoTable:
    """A record whose failed lookups are forwarded to its prototype.

    Storage lives in ``_fields``; ``_prototype`` is the next record to ask.
    Subclasses override attribute access, so both slots are written with
    ``object.__setattr__``.
    """

    def __init__(self, prototype: Optional["ProtoTable"] = None):
        object.__setattr__(self, "_fields", {})
        object.__setattr__(self, "_prototype", prototype)

    def _rawget(self, key: str) -> Any:
        """Get an own field without consulting the prototype."""
        return self._fields.get(key, MISSING)

    def _rawset(self, key: str, value: Any) -> None:
        self._fields[key] = value

    def _rawhas(self, key: str) -> bool:
        return key in self._fields

    def _rawdelete(self, key: str) -> bool:
        if key in self._fields:
            del self._fields[key]
            return True
        return False

    def _chain(self) -> Iterator["ProtoTable"]:
        """Yield this record and then every prototype up to the root."""
        current: Optional[ProtoTable] = self
        while current is not None:
            yield current
            current = current._prototype

    def _resolve(self, key: str) -> Tuple[Any, Optional["ProtoTable"]]:
        """Find ``key`` along the chain.

        Returns the value and the record that holds it, or ``(MISSING, None)``.
        """
        for record in self._chain():
            if key in record._fields:
                return record._fields[key], record
        return MISSING, None

    def _owner_of(self, key: str) -> Optional["ProtoTable"]:
        """Return the first record in the chain that holds ``key`` itself."""
        return self._resolve(key)[1]

    def _keys(self) -> List[str]:
        """Every key visible through the chain, nearest first, without repeats."""
        seen: Dict[str, None] = {}
        for record in self._chain():
            for key in record._fields:
                seen.setdefault(key, None)
        return list(seen)
