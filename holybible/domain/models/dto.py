"""Immutable result objects built from decoded API responses.

Each DTO keeps a read-only copy of the decoded structure it was built from
in ``raw_payload`` so fields the models do not cover remain reachable.
Missing fields fall back to zero or empty values; construction never
fails on a partial body.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


class FrozenPayload(Mapping[str, Any]):
    """Read-only copy of a decoded JSON object.

    Nested objects become FrozenPayload and arrays become tuples, so nothing
    reachable from a DTO can be changed in place. Picklable, unlike
    types.MappingProxyType, so DTOs can go through the persistent caches.
    """

    def __init__(self, data: Mapping[str, Any] = ()):
        self._data = {key: _freeze(value) for key, value in dict(data).items()}

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        return f"FrozenPayload({self._data!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Returns a mutable deep copy as plain dicts and lists."""
        return {key: _thaw(value) for key, value in self._data.items()}


def _freeze(value: Any) -> Any:
    if isinstance(value, FrozenPayload):
        return value
    if isinstance(value, Mapping):
        return FrozenPayload(value)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, FrozenPayload):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


class _PayloadMixin:
    """Freezes ``raw_payload`` however the DTO was constructed."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_payload", _freeze(self.raw_payload))


@dataclass(frozen=True)
class VerseDTO(_PayloadMixin):
    """A single verse."""
    number: int
    text: str
    raw_payload: Mapping[str, Any] = field(default_factory=FrozenPayload, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VerseDTO":
        return cls(
            number=_as_int(data.get("number")),
            text=_as_str(data.get("text")),
            raw_payload=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"number": self.number, "text": self.text}


@dataclass(frozen=True)
class BookDTO(_PayloadMixin):
    """Book metadata as listed by the API."""
    abbreviation: str
    name: str
    chapter_count: int
    testament: str
    raw_payload: Mapping[str, Any] = field(default_factory=FrozenPayload, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BookDTO":
        abbrev = data.get("abbrev")
        # The API nests abbreviations per language: {"pt": "gn", "en": "gn"}
        if isinstance(abbrev, Mapping):
            abbreviation = _as_str(abbrev.get("pt"))
        else:
            abbreviation = _as_str(abbrev)
        return cls(
            abbreviation=abbreviation,
            name=_as_str(data.get("name")),
            chapter_count=_as_int(data.get("chapters")),
            testament=_as_str(data.get("testament")),
            raw_payload=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "abbrev": self.abbreviation,
            "name": self.name,
            "chapters": self.chapter_count,
            "testament": self.testament,
        }


@dataclass(frozen=True)
class VersionDTO(_PayloadMixin):
    """A Bible version (translation) offered by the API."""
    code: str
    name: str
    raw_payload: Mapping[str, Any] = field(default_factory=FrozenPayload, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VersionDTO":
        return cls(
            code=_as_str(data.get("version")),
            name=_as_str(data.get("name")),
            raw_payload=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"version": self.code, "name": self.name}


@dataclass(frozen=True)
class ChapterDTO(_PayloadMixin):
    """A chapter with its book metadata and ordered verses."""
    book: BookDTO
    number: int
    verses: Tuple[VerseDTO, ...] = ()
    raw_payload: Mapping[str, Any] = field(default_factory=FrozenPayload, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChapterDTO":
        raw_verses = data.get("verses")
        verses = tuple(
            VerseDTO.from_dict(_as_mapping(item))
            for item in (raw_verses if isinstance(raw_verses, list) else [])
        )
        return cls(
            book=BookDTO.from_dict(_as_mapping(data.get("book"))),
            number=_as_int(_as_mapping(data.get("chapter")).get("number")),
            verses=verses,
            raw_payload=data,
        )

    @property
    def verse_count(self) -> int:
        return len(self.verses)

    def get_verse(self, number: int) -> Optional[VerseDTO]:
        """Returns the verse with the given number, or None if absent."""
        for verse in self.verses:
            if verse.number == number:
                return verse
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "book": self.book.to_dict(),
            "number": self.number,
            "verses": [verse.to_dict() for verse in self.verses],
        }
