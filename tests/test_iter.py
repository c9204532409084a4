"""
Unit tests for ListIterator
"""

import pytest
from chargekit.iter import ListIterator
from chargekit.models import ListMeta
from chargekit.params import ListParams


class StubSource:
    """Page fetch stub serving canned pages"""

    def __init__(self, pages, more=True, fail_on=None, error=None):
        self.pages = pages
        self.more = more
        self.fail_on = fail_on
        self.error = error
        self.calls = []

    def __call__(self, body):
        self.calls.append(list(body))
        index = len(self.calls) - 1
        if index == self.fail_on:
            raise self.error
        items = self.pages[index]
        has_more = self.more if index < len(self.pages) - 1 else False
        return items, ListMeta(has_more=has_more, total_count=100 + index)


def make_iter(source, single=False, offset=None):
    params = ListParams(single=single)
    if offset is not None:
        params.filters.add_filter("offset", "", offset)
    body = []
    params.append_to(body)
    return ListIterator(params, body, source), params


def test_items_yielded_in_page_order():
    """Test items come out in the order the pages produced them"""
    source = StubSource([["a", "b"], ["c"], ["d", "e", "f"]])
    it, _ = make_iter(source)

    assert list(it) == ["a", "b", "c", "d", "e", "f"]
    assert len(source.calls) == 3


def test_offset_advances_by_page_size():
    """Test offset filter grows by each page's item count"""
    source = StubSource([list(range(5)), list(range(5, 10)), list(range(10, 13))])
    it, params = make_iter(source, offset=0)

    assert len(list(it)) == 13
    assert it.filters.get("offset") == "13"
    assert it.offset == 13
    assert len(source.calls) == 3
    assert ("offset", "0") in source.calls[0]
    assert ("offset", "5") in source.calls[1]
    assert ("offset", "10") in source.calls[2]
    assert [k for k, _ in source.calls[2]].count("offset") == 1

    # caller's params untouched
    assert params.filters.get("offset") == "0"

    # exhausted: no further fetch
    assert it.has_more() is False
    with pytest.raises(StopIteration):
        it.advance()
    assert len(source.calls) == 3


def test_offset_added_when_absent():
    """Test offset filter is introduced after the first page"""
    source = StubSource([["a", "b"], ["c"]])
    it, _ = make_iter(source)

    list(it)

    assert all(k != "offset" for k, _ in source.calls[0])
    assert ("offset", "2") in source.calls[1]


def test_empty_first_page():
    """Test empty first page ends iteration without error"""
    source = StubSource([[]])
    it, _ = make_iter(source)

    assert it.has_more() is False
    assert list(it) == []
    with pytest.raises(StopIteration):
        it.advance()
    assert len(source.calls) == 1


def test_empty_page_is_terminal_even_if_more_reported():
    """Test zero-item page stops iteration regardless of metadata"""
    source = StubSource([["a"], [], ["never"]])
    it, _ = make_iter(source)

    assert list(it) == ["a"]
    assert len(source.calls) == 2
    assert it.has_more() is False


def test_single_page_mode():
    """Test single mode performs at most one fetch"""
    source = StubSource([["a", "b"], ["c"]])
    it, _ = make_iter(source, single=True)

    items = []
    while it.has_more():
        items.append(it.advance())

    assert items == ["a", "b"]
    assert len(source.calls) == 1
    assert it.current_metadata().has_more is True


def test_fetch_error_on_second_page():
    """Test fetch error surfaces once from advance and halts iteration"""
    error = RuntimeError("boom")
    source = StubSource([["a", "b"], ["c"]], fail_on=1, error=error)
    it, _ = make_iter(source)

    assert it.advance() == "a"
    assert it.advance() == "b"

    with pytest.raises(RuntimeError) as exc_info:
        it.advance()

    assert exc_info.value is error
    assert it.err is error
    assert it.has_more() is False
    with pytest.raises(StopIteration):
        it.advance()
    assert len(source.calls) == 2


def test_fetch_error_seen_by_has_more_is_raised_from_advance():
    """Test error hit while checking has_more is raised by the next advance"""
    error = ValueError("bad page")
    source = StubSource([["a"], ["b"]], fail_on=1, error=error)
    it, _ = make_iter(source)

    assert it.advance() == "a"
    assert it.has_more() is True

    with pytest.raises(ValueError):
        it.advance()

    assert it.has_more() is False
    assert len(source.calls) == 2


def test_fetch_error_on_first_page():
    """Test error on the very first fetch"""
    source = StubSource([], fail_on=0, error=ConnectionError("down"))
    it, _ = make_iter(source)

    with pytest.raises(ConnectionError):
        next(it)

    assert it.has_more() is False
    assert list(it) == []
    assert len(source.calls) == 1


def test_metadata_replaced_per_page():
    """Test current_metadata reflects only the latest page"""
    source = StubSource([["a"], ["b"], ["c"]])
    it, _ = make_iter(source)

    assert it.current_metadata() is None

    it.advance()
    first = it.current_metadata()
    assert first.total_count == 100
    assert first.has_more is True

    it.advance()
    second = it.current_metadata()
    assert second is not first
    assert second.total_count == 101


def test_lazy_fetching():
    """Test pages are only fetched when needed"""
    source = StubSource([["a", "b"], ["c"]])
    it, _ = make_iter(source)

    assert source.calls == []
    it.advance()
    it.advance()
    assert len(source.calls) == 1
    it.advance()
    assert len(source.calls) == 2


def test_no_params():
    """Test iterator without list params"""
    source = StubSource([["a"]])
    it = ListIterator(None, None, source)

    assert list(it) == ["a"]
    assert it.single is False


def test_invalid_offset_rejected_at_construction():
    """Test a non-integer offset filter fails before any fetch"""
    source = StubSource([["a"]])

    with pytest.raises(ValueError, match="offset filter must be an integer"):
        make_iter(source, offset="abc")

    with pytest.raises(ValueError, match="must not be negative"):
        make_iter(source, offset=-1)

    assert source.calls == []


def test_initial_offset_is_respected():
    """Test a caller-supplied starting offset is advanced from"""
    source = StubSource([["a", "b"], ["c"]])
    it, _ = make_iter(source, offset=40)

    assert it.offset == 40
    list(it)

    assert ("offset", "40") in source.calls[0]
    assert ("offset", "42") in source.calls[1]
    assert it.offset == 43
