import pytest
from unittest.mock import MagicMock

from holybible.core.services.bible_service import BibleService
from holybible.domain.exceptions import ApiResponseError, InvalidChapterError, InvalidVerseError, NetworkError
from holybible.domain.interfaces.bible_client import BibleClient
from holybible.domain.interfaces.cache import CacheStore
from holybible.domain.models.books import Book
from holybible.domain.models.dto import BookDTO, ChapterDTO, VerseDTO, VersionDTO
from holybible.infrastructure.cache.null_cache import NullCacheStore


class DictCacheStore(CacheStore):
    """In-memory CacheStore recording the TTL of each write."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ttl=3600):
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    def has(self, key):
        return key in self.data

    def delete(self, key):
        self.data.pop(key, None)
        return True

    def clear(self):
        self.data.clear()
        return True


@pytest.fixture
def client():
    return MagicMock(spec=BibleClient)


@pytest.fixture
def cache():
    return DictCacheStore()


@pytest.fixture
def service(client, cache):
    return BibleService(client=client, cache=cache, version="nvi", cache_ttl=600)


def test_get_books_fetches_and_caches(service, client, cache, books_payload):
    client.get.return_value = books_payload

    books = service.get_books()

    client.get.assert_called_once_with("books")
    assert [b.abbreviation for b in books] == ["gn", "jo"]
    assert all(isinstance(b, BookDTO) for b in books)
    assert cache.data["books"] == tuple(books)
    assert cache.ttls["books"] == 600


def test_cached_books_skip_the_client(service, client, books_payload):
    client.get.return_value = books_payload

    first = service.get_books()
    second = service.get_books()

    assert client.get.call_count == 1
    assert first == second


def test_mutating_returned_list_does_not_touch_cache(service, client, books_payload):
    client.get.return_value = books_payload
    service.get_books().clear()
    assert len(service.get_books()) == 2


def test_get_available_versions(service, client, cache, versions_payload):
    client.get.return_value = versions_payload

    versions = service.get_available_versions()

    client.get.assert_called_once_with("versions")
    assert [v.code for v in versions] == ["nvi", "acf"]
    assert all(isinstance(v, VersionDTO) for v in versions)
    assert "versions" in cache.data


def test_get_chapter_uses_version_in_path_and_key(service, client, cache, chapter_payload):
    client.get.return_value = chapter_payload

    chapter = service.get_chapter(Book.JOHN, 3)

    client.get.assert_called_once_with("verses/nvi/jo/3")
    assert isinstance(chapter, ChapterDTO)
    assert chapter.verse_count == 3
    assert cache.data["chapter:nvi:jo:3"] is chapter


def test_get_chapter_is_idempotent_while_cached(service, client, chapter_payload):
    client.get.return_value = chapter_payload

    first = service.get_chapter(Book.JOHN, 3)
    second = service.get_chapter(Book.JOHN, 3)

    assert first == second
    assert client.get.call_count == 1


def test_get_verse(service, client, cache, verse_payload):
    client.get.return_value = verse_payload

    verse = service.get_verse(Book.JOHN, 3, 16)

    client.get.assert_called_once_with("verses/nvi/jo/3/16")
    assert isinstance(verse, VerseDTO)
    assert verse.number == 16
    assert cache.data["verse:nvi:jo:3:16"] == verse


def test_book_may_be_given_as_text(service, client, chapter_payload):
    client.get.return_value = chapter_payload
    service.get_chapter("john", 3)
    service.get_chapter("gn", 1)
    assert [c.args[0] for c in client.get.call_args_list] == ["verses/nvi/jo/3", "verses/nvi/gn/1"]


def test_unknown_book_text_raises_before_io(service, client):
    with pytest.raises(ValueError, match="Unknown book"):
        service.get_chapter("nowhere", 1)
    client.get.assert_not_called()


@pytest.mark.parametrize("chapter", [0, -1])
def test_invalid_chapter_raises_before_any_io(client, chapter):
    cache = MagicMock(spec=CacheStore)
    service = BibleService(client=client, cache=cache)

    with pytest.raises(InvalidChapterError, match=f"Chapter number must be positive, got: {chapter}") as excinfo:
        service.get_chapter(Book.JOHN, chapter)

    assert excinfo.value.chapter == chapter
    client.get.assert_not_called()
    cache.get.assert_not_called()
    cache.set.assert_not_called()


@pytest.mark.parametrize("verse", [0, -5])
def test_invalid_verse_raises_before_any_io(client, verse):
    cache = MagicMock(spec=CacheStore)
    service = BibleService(client=client, cache=cache)

    with pytest.raises(InvalidVerseError) as excinfo:
        service.get_verse(Book.JOHN, 3, verse)

    assert excinfo.value.verse == verse
    client.get.assert_not_called()
    cache.get.assert_not_called()


def test_chapter_error_takes_precedence_over_verse_error(service, client):
    with pytest.raises(InvalidChapterError):
        service.get_verse(Book.JOHN, 0, 0)
    client.get.assert_not_called()


def test_switching_version_uses_distinct_keys(service, client, cache, chapter_payload):
    client.get.return_value = chapter_payload
    service.get_chapter(Book.JOHN, 3)

    service.set_version("acf")
    assert service.get_version() == "acf"
    service.get_chapter(Book.JOHN, 3)

    assert [c.args[0] for c in client.get.call_args_list] == ["verses/nvi/jo/3", "verses/acf/jo/3"]
    assert {"chapter:nvi:jo:3", "chapter:acf:jo:3"} <= set(cache.data)

    service.set_version("nvi")
    service.get_chapter(Book.JOHN, 3)
    assert client.get.call_count == 2


def test_network_errors_propagate_and_nothing_is_cached(service, client, cache):
    client.get.side_effect = NetworkError("Connection refused", path="books", attempts=4)

    with pytest.raises(NetworkError):
        service.get_books()
    assert cache.data == {}


def test_list_endpoint_with_object_body_is_rejected(service, client, cache):
    client.get.return_value = {"msg": "unexpected"}

    with pytest.raises(ApiResponseError, match="Expected a JSON array"):
        service.get_books()
    assert cache.data == {}


def test_object_endpoint_with_array_body_is_rejected(service, client):
    client.get.return_value = [1, 2]
    with pytest.raises(ApiResponseError, match="Expected a JSON object"):
        service.get_verse(Book.JOHN, 3, 16)


def test_non_object_list_items_are_skipped(service, client, books_payload, caplog):
    client.get.return_value = books_payload + ["junk", 7]

    books = service.get_books()

    assert len(books) == 2
    assert "Skipped 2 non-object element(s)" in caplog.text


def test_failed_cache_write_still_returns_result(client, verse_payload, caplog):
    cache = MagicMock(spec=CacheStore)
    cache.get.return_value = None
    cache.set.return_value = False
    client.get.return_value = verse_payload

    verse = BibleService(client=client, cache=cache).get_verse(Book.JOHN, 3, 16)

    assert verse.number == 16
    assert "Failed to cache result for: verse:nvi:jo:3:16" in caplog.text


def test_null_cache_always_hits_the_client(client, books_payload):
    client.get.return_value = books_payload
    service = BibleService(client=client, cache=NullCacheStore())

    service.get_books()
    service.get_books()

    assert client.get.call_count == 2


def test_cached_entry_of_wrong_type_is_refetched(service, client, cache, chapter_payload, caplog):
    cache.data["chapter:nvi:jo:3"] = VerseDTO(16, "left over from something else")
    client.get.return_value = chapter_payload

    chapter = service.get_chapter(Book.JOHN, 3)

    assert isinstance(chapter, ChapterDTO)
    client.get.assert_called_once_with("verses/nvi/jo/3")
    assert cache.data["chapter:nvi:jo:3"] is chapter
    assert "Ignoring cached VerseDTO under 'chapter:nvi:jo:3'" in caplog.text


@pytest.mark.parametrize("foreign", [["plain", "list"], (VersionDTO("nvi", ""),), "books"])
def test_cached_list_of_wrong_shape_is_refetched(service, client, cache, books_payload, foreign):
    cache.data["books"] = foreign
    client.get.return_value = books_payload

    books = service.get_books()

    client.get.assert_called_once_with("books")
    assert all(isinstance(b, BookDTO) for b in books)
    assert cache.data["books"] == tuple(books)
