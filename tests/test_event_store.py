from datetime import date, time

import pytest

from errors import NotFoundError, ValidationError


def _seed(store):
    store.create(date(2024, 6, 3), time(18, 0), "Newsletter")
    store.create(date(2024, 6, 1), time(12, 30), "Reel")
    store.create(date(2024, 6, 1), time(9, 0), "Launch post")
    store.create(date(2024, 5, 31), time(9, 0), "Teaser")
    store.create(date(2024, 6, 10), time(9, 0), "Webinar")


def test_list_filters_inclusive_range_and_orders_by_date_then_time(store):
    _seed(store)

    events = store.list(date(2024, 6, 1), date(2024, 6, 3))

    assert [e.title for e in events] == ["Launch post", "Reel", "Newsletter"]
    assert all(date(2024, 6, 1) <= e.date <= date(2024, 6, 3) for e in events)


def test_list_empty_range_returns_empty_list(store):
    _seed(store)

    assert store.list(date(2025, 1, 1), date(2025, 1, 31)) == []
    assert store.list(date(2024, 6, 3), date(2024, 6, 1)) == []


def test_list_requires_both_bounds(store):
    with pytest.raises(ValidationError):
        store.list(None, date(2024, 6, 1))


def test_create_preserves_fields_and_nulls_optionals(store):
    created = store.create(
        date(2024, 6, 1), time(9, 0), "Launch post",
        channel="Social", platform="Instagram", notes="Carousel, 5 slides", creator=None,
    )

    assert created.id is not None
    fetched = store.get(created.id)
    assert fetched.title == "Launch post"
    assert fetched.channel == "Social"
    assert fetched.platform == "Instagram"
    assert fetched.notes == "Carousel, 5 slides"
    assert fetched.created_by is None

    bare = store.create(date(2024, 6, 2), time(10, 0), "Story", channel="", notes="")
    assert bare.channel is None
    assert bare.platform is None
    assert bare.notes is None


@pytest.mark.parametrize("field", ["date", "time", "title"])
def test_create_rejects_missing_required_field(store, field):
    values = {"date": date(2024, 6, 1), "time": time(9, 0), "title": "Launch post"}
    values[field] = None if field != "title" else ""

    with pytest.raises(ValidationError):
        store.create(**values)

    assert store.list(date(2024, 1, 1), date(2024, 12, 31)) == []


def test_update_replaces_fields(store):
    created = store.create(date(2024, 6, 1), time(9, 0), "Launch post", channel="Social", notes="draft")

    updated = store.update(created.id, date(2024, 6, 2), time(11, 15), "Launch post v2", platform="LinkedIn")

    assert updated.id == created.id
    fetched = store.get(created.id)
    assert fetched.date == date(2024, 6, 2)
    assert fetched.time == time(11, 15)
    assert fetched.title == "Launch post v2"
    assert fetched.platform == "LinkedIn"
    assert fetched.channel is None
    assert fetched.notes is None


def test_update_unknown_id_raises_not_found_and_creates_nothing(store):
    with pytest.raises(NotFoundError):
        store.update(999, date(2024, 6, 1), time(9, 0), "Ghost")

    assert store.list(date(2024, 1, 1), date(2024, 12, 31)) == []


def test_update_validates_before_lookup(store):
    created = store.create(date(2024, 6, 1), time(9, 0), "Launch post")

    with pytest.raises(ValidationError):
        store.update(created.id, date(2024, 6, 1), time(9, 0), "")

    assert store.get(created.id).title == "Launch post"


def test_delete_removes_event(store):
    keep = store.create(date(2024, 6, 1), time(9, 0), "Keep")
    gone = store.create(date(2024, 6, 1), time(10, 0), "Gone")

    store.delete(gone.id)

    with pytest.raises(NotFoundError):
        store.get(gone.id)
    assert [e.id for e in store.list(date(2024, 6, 1), date(2024, 6, 1))] == [keep.id]


def test_delete_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.delete(12345)
