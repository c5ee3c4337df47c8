"""Tests for the circular ImageList: structure, navigation and removal."""
import pytest

from picroll.errors import DecodeError, DeleteError
from picroll.state import ImageList
from picroll.types import Boundary


def ok_loader(rec):
    pass


def failing_on(*names):
    def loader(rec):
        if rec.path in names:
            raise DecodeError(rec.path, "broken")
    return loader


def paths(images):
    return [r.path for r in images]


def assert_ring_ok(images):
    recs = list(images)
    assert len(recs) == images.count
    for r in recs:
        assert images.prev_of(images.next_of(r)) is r
        assert images.next_of(images.prev_of(r)) is r
    if recs:
        # Walking count steps from the anchor comes back to the anchor
        r = images.anchor
        for _ in range(images.count):
            r = images.next_of(r)
        assert r is images.anchor


class TestStructure:
    def test_from_paths_keeps_order(self):
        images = ImageList.from_paths(["a", "b", "c"])
        assert paths(images) == ["a", "b", "c"]
        assert images.anchor.path == "a"
        assert images.current is None
        assert_ring_ok(images)

    def test_single_record_links_to_itself(self):
        images = ImageList.from_paths(["a"])
        rec = images.anchor
        assert rec.next == rec.slot == rec.prev

    def test_empty_list(self):
        images = ImageList()
        assert images.is_empty
        assert len(images) == 0
        assert images.anchor is None
        assert images.advance(ok_loader) is Boundary.END_OF_LIST
        assert images.retreat(ok_loader) is Boundary.START_OF_LIST

    def test_position(self):
        images = ImageList.from_paths(["a", "b", "c"])
        assert images.position(images.slots[2]) == 2

    def test_clear_drops_records_and_annotations(self):
        images = ImageList.from_paths(["a", "b"])
        rec = images.anchor
        rec.annotation = "keep"
        images.clear()
        assert images.is_empty
        assert rec.annotation is None


class TestNavigation:
    def test_advance_walks_to_end(self):
        images = ImageList.from_paths(["a", "b", "c"])
        assert images.advance(ok_loader).path == "a"
        assert images.advance(ok_loader).path == "b"
        assert images.advance(ok_loader).path == "c"
        assert images.advance(ok_loader) is Boundary.END_OF_LIST
        assert images.current.path == "c"

    def test_retreat_from_start_is_boundary(self):
        images = ImageList.from_paths(["a", "b"])
        images.advance(ok_loader)
        assert images.retreat(ok_loader) is Boundary.START_OF_LIST
        assert images.current.path == "a"

    def test_retreat_without_cursor_lands_on_last(self):
        images = ImageList.from_paths(["a", "b", "c"])
        assert images.retreat(ok_loader).path == "c"

    def test_advance_skips_unreadable(self):
        images = ImageList.from_paths(["a", "bad", "c"])
        loader = failing_on("bad")
        assert images.advance(loader).path == "a"
        assert images.advance(loader).path == "c"

    def test_retreat_skips_unreadable(self):
        images = ImageList.from_paths(["a", "bad", "c"])
        loader = failing_on("bad")
        images.advance(loader)
        images.advance(loader)
        assert images.retreat(loader).path == "a"

    def test_unreadable_tail_restores_cursor(self):
        images = ImageList.from_paths(["a", "bad1", "bad2"])
        loader = failing_on("bad1", "bad2")
        images.advance(loader)
        assert images.advance(loader) is Boundary.END_OF_LIST
        assert images.current.path == "a"

    def test_nothing_loadable(self):
        images = ImageList.from_paths(["bad1", "bad2"])
        assert images.advance(failing_on("bad1", "bad2")) is Boundary.END_OF_LIST
        assert images.current is None

    def test_rewind_returns_to_anchor(self):
        images = ImageList.from_paths(["a", "b", "c"])
        images.advance(ok_loader)
        images.advance(ok_loader)
        images.rewind()
        assert images.advance(ok_loader).path == "a"


class TestRemoval:
    @pytest.mark.parametrize("k", [1, 2, 3])
    def test_remove_each_position_keeps_ring(self, k):
        images = ImageList.from_paths(["a", "b", "c", "d"])
        for _ in range(k):
            images.advance(ok_loader)
        victim = images.current
        images.remove(victim, delete_file=lambda p: None)
        assert images.count == 3
        assert victim.path not in paths(images)
        assert victim.next is None and victim.prev is None
        assert_ring_ok(images)

    def test_remove_interior_moves_to_next(self):
        images = ImageList.from_paths(["a", "b", "c"])
        images.advance(ok_loader)
        images.advance(ok_loader)
        assert images.remove(images.current, delete_file=lambda p: None).path == "c"

    def test_remove_last_moves_to_prev(self):
        images = ImageList.from_paths(["a", "b", "c"])
        for _ in range(3):
            images.advance(ok_loader)
        assert images.remove(images.current, delete_file=lambda p: None).path == "b"
        assert images.anchor.path == "a"
        assert_ring_ok(images)

    def test_remove_anchor_moves_anchor(self):
        images = ImageList.from_paths(["a", "b", "c"])
        images.advance(ok_loader)
        assert images.remove(images.current, delete_file=lambda p: None).path == "b"
        assert images.anchor.path == "b"
        assert paths(images) == ["b", "c"]

    def test_remove_down_to_one(self):
        images = ImageList.from_paths(["a", "b"])
        images.advance(ok_loader)
        survivor = images.remove(images.current, delete_file=lambda p: None)
        assert survivor.path == "b"
        assert images.anchor is survivor
        assert survivor.next == survivor.slot == survivor.prev

    def test_remove_only_record_empties_list(self):
        images = ImageList.from_paths(["a"])
        images.advance(ok_loader)
        assert images.remove(images.current, delete_file=lambda p: None) is None
        assert images.is_empty
        assert images.anchor is None
        assert images.current is None

    def test_remove_all_one_by_one(self):
        images = ImageList.from_paths(["a", "b", "c", "d", "e"])
        images.advance(ok_loader)
        while images.count:
            images.remove(images.current, delete_file=lambda p: None)
            assert_ring_ok(images)
        assert images.current is None

    def test_failed_delete_leaves_list_unchanged(self):
        images = ImageList.from_paths(["a", "b"])
        images.advance(ok_loader)

        def refuse(path):
            raise PermissionError(13, "Permission denied", path)

        with pytest.raises(DeleteError):
            images.remove(images.current, delete_file=refuse)
        assert paths(images) == ["a", "b"]
        assert images.current.path == "a"

    def test_remove_really_deletes_file(self, tmp_path):
        f = tmp_path / "a.png"
        f.write_bytes(b"x")
        images = ImageList.from_paths([str(f)])
        images.advance(ok_loader)
        images.remove(images.current)
        assert not f.exists()
