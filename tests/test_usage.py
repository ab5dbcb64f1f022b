
import pytest

from app.core.exceptions import NotFoundError
from app.models.note import Note
from app.models.tag import Tag
from app.services import associations, tag_store, usage
from app.services.books import soft_delete_book
from app.services.notes import soft_delete_note


def add_note(run, book_id):
    async def _add(db):
        note = Note(book_id=book_id, content="Another note")
        db.add(note)
        await db.commit()
        return note.id
    return run(_add)


def test_live_counts(run, seed):
    book_id, note_id = seed
    other_note = add_note(run, book_id)
    run(associations.set_note_tags, note_id, ["Rust"])
    run(associations.set_note_tags, other_note, ["Rust"])
    run(associations.set_book_tags, book_id, ["Rust"])
    rust = run(tag_store.find_by_slug, "rust")

    assert run(usage.note_count, rust.id) == 2
    assert run(usage.book_count, rust.id) == 1


def test_counts_for_unused_tag_are_zero(run):
    tag = run(tag_store.create, "Lonely")

    assert run(usage.note_count, tag.id) == 0
    assert run(usage.book_count, tag.id) == 0


def test_cached_usage_count_only_moves_on_refresh(run, seed):
    _, note_id = seed
    run(associations.set_note_tags, note_id, ["A", "B"])
    b = run(tag_store.find_by_slug, "b")

    assert run(usage.refresh_usage_count, b.id) == 1

    run(associations.set_note_tags, note_id, ["A", "C"])

    assert run(usage.note_count, b.id) == 0
    assert run(tag_store.find_by_id, b.id).usage_count == 1

    assert run(usage.refresh_usage_count, b.id) == 0
    assert run(tag_store.find_by_id, b.id).usage_count == 0


def test_refresh_sums_books_and_notes(run, seed):
    book_id, note_id = seed
    run(associations.set_note_tags, note_id, ["Rust"])
    run(associations.set_book_tags, book_id, ["Rust"])
    rust = run(tag_store.find_by_slug, "rust")

    assert run(usage.refresh_usage_count, rust.id) == 2


def test_refresh_missing_tag(run):
    with pytest.raises(NotFoundError):
        run(usage.refresh_usage_count, 99999)


def test_deleting_a_note_keeps_tag_and_cached_count(run, seed):
    _, note_id = seed
    run(associations.set_note_tags, note_id, ["Rust"])
    rust = run(tag_store.find_by_slug, "rust")
    run(usage.refresh_usage_count, rust.id)

    run(soft_delete_note, note_id)

    assert run(associations.get_note_tag_names, note_id) == []
    assert run(usage.note_count, rust.id) == 0
    tag = run(tag_store.find_by_id, rust.id)
    assert tag.usage_count == 1


def test_deleted_books_are_not_counted(run, seed):
    book_id, _ = seed
    run(associations.set_book_tags, book_id, ["Rust"])
    rust = run(tag_store.find_by_slug, "rust")

    run(soft_delete_book, book_id)

    assert run(usage.book_count, rust.id) == 0


def seed_cached_counts(run, counts):
    async def _seed(db):
        for name, count in counts.items():
            db.add(Tag(name=name, slug=name.lower(), usage_count=count))
        await db.commit()
    run(_seed)


def test_popular_returns_top_tags_by_cached_count(run):
    seed_cached_counts(run, {"One": 1, "Five": 5, "Three": 3, "Four": 4, "Two": 2})

    tags = run(usage.popular, 3)

    assert [tag.name for tag in tags] == ["Five", "Four", "Three"]
    assert [tag.usage_count for tag in tags] == [5, 4, 3]


def test_popular_skips_deleted_and_uncounted_tags(run):
    seed_cached_counts(run, {"Gone": 9, "Kept": 1, "Unknown": None})
    gone = run(tag_store.find_by_slug, "gone")
    run(tag_store.soft_delete, gone.id)

    tags = run(usage.popular, 10)

    assert [tag.name for tag in tags] == ["Kept"]


def test_popular_ignores_live_counts(run, seed):
    _, note_id = seed
    seed_cached_counts(run, {"Cached": 7})
    run(associations.set_note_tags, note_id, ["Live"])

    tags = run(usage.popular, 10)

    # "Live" has a real association but its cached count is still 0
    assert [(tag.name, tag.usage_count) for tag in tags] == [("Cached", 7), ("Live", 0)]
