"""Tests for owner-scoped note operations and tag reconciliation."""
import pytest

from notes_api.core.exceptions import NotFoundError, StoreError, ValidationError


@pytest.mark.anyio
async def test_create_returns_projection_with_normalized_tags(note_service, repo):
    note = await note_service.create_note("u1", title="Groceries", body="", tag_names=["Food", " food"])

    assert note.id == 1
    assert note.title == "Groceries"
    assert note.body == ""
    assert note.tags == ["food"]
    assert list(repo.tags) == ["food"]
    assert repo.tag_names_for(note.id) == {"food"}


@pytest.mark.anyio
async def test_duplicate_tag_variants_store_one_tag_linked_once(note_service, repo):
    note = await note_service.create_note("u1", title="Plan", tag_names=["Work", " work ", "WORK"])

    assert note.tags == ["work"]
    assert repo.tags == {"work": 1}
    assert repo.links == {(note.id, 1)}


@pytest.mark.anyio
async def test_body_and_tags_default_to_empty(note_service):
    note = await note_service.create_note("u1", title="Bare")

    assert note.body == ""
    assert note.tags == []


@pytest.mark.anyio
@pytest.mark.parametrize("title", [None, "", "   ", "\n\t"])
async def test_create_without_title_is_rejected_before_the_store(note_service, repo, title):
    with pytest.raises(ValidationError):
        await note_service.create_note("u1", title=title, tag_names=["x"])

    assert repo.calls == []
    assert repo.notes == {}
    assert repo.tags == {}


@pytest.mark.anyio
async def test_title_is_trimmed(note_service):
    note = await note_service.create_note("u1", title="  Groceries  ")
    assert note.title == "Groceries"


@pytest.mark.anyio
async def test_existing_tags_are_reused_across_owners(note_service, repo):
    first = await note_service.create_note("u1", title="A", tag_names=["shared"])
    second = await note_service.create_note("u2", title="B", tag_names=["Shared"])

    assert repo.tags == {"shared": 1}
    assert repo.tag_names_for(first.id) == {"shared"}
    assert repo.tag_names_for(second.id) == {"shared"}


@pytest.mark.anyio
async def test_update_replaces_tag_set_exactly(note_service, repo):
    note = await note_service.create_note("u1", title="Note", tag_names=["a", "b"])

    updated = await note_service.update_note("u1", note.id, title="Note", tag_names=["b", "c"])

    assert updated.tags == ["b", "c"]
    assert repo.tag_names_for(note.id) == {"b", "c"}
    # "a" stays in the shared vocabulary
    assert set(repo.tags) == {"a", "b", "c"}


@pytest.mark.anyio
async def test_update_with_no_tags_clears_associations(note_service, repo):
    note = await note_service.create_note("u1", title="Groceries", body="", tag_names=["Food", " food"])

    updated = await note_service.update_note("u1", note.id, title="Groceries v2")

    assert updated.title == "Groceries v2"
    assert updated.tags == []
    assert repo.tag_names_for(note.id) == set()
    assert "food" in repo.tags


@pytest.mark.anyio
async def test_update_keeps_created_at_and_owner(note_service):
    note = await note_service.create_note("u1", title="Old", body="one")

    updated = await note_service.update_note("u1", note.id, title="New", body="two")

    assert updated.created_at == note.created_at
    assert updated.owner_id == "u1"
    assert updated.body == "two"


@pytest.mark.anyio
async def test_update_with_blank_title_is_rejected(note_service, repo):
    note = await note_service.create_note("u1", title="Keep", tag_names=["x"])
    repo.calls.clear()

    with pytest.raises(ValidationError):
        await note_service.update_note("u1", note.id, title=" ", tag_names=[])

    assert repo.calls == []
    assert repo.notes[note.id]["title"] == "Keep"
    assert repo.tag_names_for(note.id) == {"x"}


@pytest.mark.anyio
async def test_other_owner_cannot_update(note_service, repo):
    note = await note_service.create_note("alice", title="Private", tag_names=["secret"])

    with pytest.raises(NotFoundError):
        await note_service.update_note("bob", note.id, title="Hijacked", tag_names=[])

    assert repo.notes[note.id]["title"] == "Private"
    assert repo.tag_names_for(note.id) == {"secret"}


@pytest.mark.anyio
async def test_missing_and_foreign_notes_raise_the_same_error(note_service):
    note = await note_service.create_note("alice", title="Private")

    with pytest.raises(NotFoundError) as foreign:
        await note_service.update_note("bob", note.id, title="x")
    with pytest.raises(NotFoundError) as missing:
        await note_service.update_note("bob", 999, title="x")

    assert str(foreign.value) == str(missing.value)


@pytest.mark.anyio
async def test_other_owner_cannot_delete(note_service, repo):
    note = await note_service.create_note("alice", title="Private")

    with pytest.raises(NotFoundError):
        await note_service.delete_note("bob", note.id)

    assert note.id in repo.notes


@pytest.mark.anyio
async def test_delete_nonexistent_note_leaves_others_untouched(note_service, repo):
    kept = await note_service.create_note("u1", title="Kept", tag_names=["t"])

    with pytest.raises(NotFoundError):
        await note_service.delete_note("u1", 12345)

    assert list(repo.notes) == [kept.id]
    assert repo.tag_names_for(kept.id) == {"t"}


@pytest.mark.anyio
async def test_delete_removes_note_and_links_but_keeps_tags(note_service, repo):
    note = await note_service.create_note("u1", title="Gone", tag_names=["orphan"])

    await note_service.delete_note("u1", note.id)

    assert repo.notes == {}
    assert repo.links == set()
    assert "orphan" in repo.tags

    with pytest.raises(NotFoundError):
        await note_service.delete_note("u1", note.id)


@pytest.mark.anyio
async def test_list_is_owner_scoped_and_newest_first(note_service):
    first = await note_service.create_note("u1", title="first")
    await note_service.create_note("u2", title="someone else")
    second = await note_service.create_note("u1", title="second", tag_names=["x"])

    notes = await note_service.list_notes("u1")

    assert [n.id for n in notes] == [second.id, first.id]
    assert notes[0].tags == ["x"]
    assert all(n.owner_id == "u1" for n in notes)


@pytest.mark.anyio
async def test_list_for_owner_without_notes_is_empty(note_service):
    await note_service.create_note("u1", title="mine")

    assert list(await note_service.list_notes("nobody")) == []


@pytest.mark.anyio
@pytest.mark.parametrize("step", ["note", "tags", "links"])
async def test_failed_create_leaves_no_trace(note_service, repo, step):
    repo.fail_at = step

    with pytest.raises(StoreError):
        await note_service.create_note("u1", title="Doomed", tag_names=["new-tag"])

    assert repo.notes == {}
    assert repo.tags == {}
    assert repo.links == set()


@pytest.mark.anyio
async def test_failed_update_keeps_previous_state(note_service, repo):
    note = await note_service.create_note("u1", title="Stable", body="b", tag_names=["a"])
    repo.fail_at = "links"

    with pytest.raises(StoreError):
        await note_service.update_note("u1", note.id, title="Changed", tag_names=["z"])

    assert repo.notes[note.id]["title"] == "Stable"
    assert repo.tag_names_for(note.id) == {"a"}
    assert "z" not in repo.tags


@pytest.mark.anyio
async def test_store_errors_propagate_unchanged(note_service, repo):
    repo.unavailable = True

    with pytest.raises(StoreError):
        await note_service.list_notes("u1")
    with pytest.raises(StoreError):
        await note_service.delete_note("u1", 1)
