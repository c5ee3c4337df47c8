"""Tests for Viewer session operations and the commands that drive them."""
import pytest

from picroll.commands import (
    CloseApp, CommandQueue, DeleteImage, FirstImage, NextImage, PrevImage,
    Rotate, ToggleNote,
)
from picroll.config import PROMPT_QUIT
from picroll.errors import SessionEnded
from picroll.types import Boundary, ScaleMode, Size
from picroll.viewer import Viewer

from conftest import FakeDecoder, FakeMetadata, FakePrompter


SIZES = {"a": (120, 90), "b": (60, 40), "c": (80, 80), "big": (400, 300)}


@pytest.fixture
def deleted():
    return []


@pytest.fixture
def make_viewer(make_state, sink, clock, deleted):
    def _make(paths, answer=True, delay=0):
        state = make_state(paths)
        prompter = FakePrompter(answer)
        viewer = Viewer(state, FakeDecoder(SIZES), FakeMetadata(), prompter, sink,
                        delay_seconds=delay, clock=clock, delete_file=deleted.append)
        return viewer
    return _make


def current_path(viewer):
    return viewer.current.path


class TestNavigation:
    def test_start_shows_first_loadable(self, make_viewer, sink):
        viewer = make_viewer(["bad", "a", "b"])
        assert viewer.start().path == "a"
        assert len(sink.presented) == 1
        assert sink.presented[0].size == Size(120, 90)

    def test_start_with_nothing_loadable(self, make_viewer):
        viewer = make_viewer(["bad1", "bad2"])
        with pytest.raises(SessionEnded):
            viewer.start()

    def test_next_and_prev(self, make_viewer):
        viewer = make_viewer(["a", "b", "c"])
        viewer.start()
        viewer.next_image()
        viewer.next_image()
        assert current_path(viewer) == "c"
        viewer.prev_image()
        assert current_path(viewer) == "b"

    def test_prev_at_start(self, make_viewer):
        viewer = make_viewer(["a", "b"])
        viewer.start()
        assert viewer.prev_image() is Boundary.START_OF_LIST
        assert current_path(viewer) == "a"

    def test_next_at_end_asks_to_quit(self, make_viewer):
        viewer = make_viewer(["a", "b"], answer=True)
        viewer.start()
        viewer.next_image()
        with pytest.raises(SessionEnded):
            viewer.next_image()
        assert viewer.prompter.messages == [PROMPT_QUIT]

    def test_next_at_end_declined_stays(self, make_viewer):
        viewer = make_viewer(["a", "b"], answer=False)
        viewer.start()
        viewer.next_image()
        assert viewer.next_image() is Boundary.END_OF_LIST
        assert current_path(viewer) == "b"

    def test_first_image(self, make_viewer):
        viewer = make_viewer(["a", "b", "c"])
        viewer.start()
        viewer.next_image()
        viewer.next_image()
        assert viewer.first_image().path == "a"

    def test_revisit_restores_rotation(self, make_viewer):
        viewer = make_viewer(["a", "b"])
        viewer.start()
        viewer.rotate(90)
        viewer.next_image()
        viewer.prev_image()
        assert viewer.current.cur_rot == 90
        assert viewer.current.cur_size == Size(90, 120)


class TestScaling:
    def test_double_and_half_size(self, make_viewer, sink):
        viewer = make_viewer(["a"])
        viewer.start()
        assert viewer.double_size()
        assert viewer.state.display.scale_mode == ScaleMode.IMAGE_RATIO
        assert viewer.current.cur_size == Size(240, 180)
        assert sink.presented[-1].size == Size(240, 180)
        assert viewer.half_size()
        assert viewer.current.cur_size == Size(120, 90)

    def test_toggle_fullscreen(self, make_viewer):
        viewer = make_viewer(["a"])
        viewer.start()
        viewer.toggle_fullscreen()
        assert viewer.current.cur_size == Size(200, 150)
        viewer.toggle_fullscreen()
        assert viewer.state.display.scale_mode == ScaleMode.NORMAL
        assert viewer.current.cur_size == Size(120, 90)

    def test_toggle_fullsize_reloads_big_image(self, make_viewer):
        viewer = make_viewer(["big"])
        viewer.start()
        assert viewer.current.cur_size == Size(200, 150)
        viewer.toggle_fullsize()
        assert viewer.current.cur_size == Size(400, 300)


class TestDeletion:
    def test_delete_sole_image_ends_session(self, make_viewer, deleted):
        viewer = make_viewer(["a"])
        viewer.start()
        with pytest.raises(SessionEnded):
            viewer.delete_current()
        assert deleted == ["a"]
        assert viewer.state.images.is_empty

    def test_delete_declined(self, make_viewer, deleted):
        viewer = make_viewer(["a", "b"], answer=False)
        viewer.start()
        assert viewer.delete_current() is False
        assert deleted == []
        assert viewer.state.count == 2

    def test_delete_shows_next_and_forgets_notes(self, make_viewer, deleted, sink):
        viewer = make_viewer(["a", "b", "c"])
        viewer.start()
        viewer.set_note(3)
        assert viewer.delete_current()
        assert current_path(viewer) == "b"
        assert sink.presented[-1].size == Size(60, 40)
        assert viewer.state.notes.lists[3] == []
        assert viewer.state.images.anchor.path == "b"

    def test_delete_skips_unreadable_neighbour(self, make_viewer):
        viewer = make_viewer(["a", "bad", "c"])
        viewer.start()
        viewer.delete_current()
        assert current_path(viewer) == "c"

    def test_delete_failure_keeps_list(self, make_state, sink, clock):
        def refuse(path):
            raise PermissionError(13, "Permission denied", path)

        viewer = Viewer(make_state(["a", "b"]), FakeDecoder(SIZES), FakeMetadata(),
                        FakePrompter(True), sink, clock=clock, delete_file=refuse)
        viewer.start()
        assert viewer.delete_current() is False
        assert viewer.state.count == 2
        assert current_path(viewer) == "a"


class TestNotesAndSession:
    def test_set_note_toggles(self, make_viewer):
        viewer = make_viewer(["a"])
        viewer.start()
        assert viewer.set_note(1) is True
        assert viewer.set_note(1) is False
        with pytest.raises(ValueError):
            viewer.set_note(10)

    def test_annotate(self, make_viewer):
        viewer = make_viewer(["a"])
        viewer.start()
        viewer.annotate("sunset")
        assert viewer.current.annotation == "sunset"
        viewer.annotate("")
        assert viewer.current.annotation is None

    def test_end_session_prints_notes(self, make_viewer, capsys):
        viewer = make_viewer(["a", "b"])
        viewer.start()
        viewer.set_note(2)
        viewer.next_image()
        viewer.set_note(2)
        viewer.end_session()
        assert "Note 2: a b" in capsys.readouterr().out
        assert viewer.state.images.is_empty
        assert viewer.controller.buffer is None

    def test_slideshow_advances(self, make_viewer, clock):
        viewer = make_viewer(["a", "b", "c"], delay=3)
        viewer.start()
        assert viewer.slideshow.pending
        clock.advance(3)
        viewer.update()
        assert current_path(viewer) == "b"
        assert viewer.slideshow.pending

    def test_slideshow_delay_zero_stops(self, make_viewer, clock):
        viewer = make_viewer(["a", "b"], delay=3)
        viewer.start()
        viewer.set_slideshow_delay(0)
        clock.advance(5)
        viewer.update()
        assert current_path(viewer) == "a"

    def test_slideshow_at_end_stops_without_asking(self, make_viewer, clock):
        viewer = make_viewer(["a", "b"], delay=1)
        viewer.start()
        clock.advance(1)
        viewer.update()
        assert current_path(viewer) == "b"
        assert viewer.slideshow.pending

        clock.advance(1)
        assert viewer.slideshow.update()
        assert current_path(viewer) == "b"
        assert viewer.prompter.messages == []
        assert not viewer.slideshow.pending

    def test_manual_next_keeps_pending_fire(self, make_viewer, clock):
        viewer = make_viewer(["a", "b", "c"], delay=2)
        viewer.start()
        clock.advance(1)
        viewer.next_image()
        assert viewer.slideshow.pending
        clock.advance(1)
        viewer.update()
        assert current_path(viewer) == "c"


class TestCommands:
    def test_navigation_commands(self, make_viewer):
        viewer = make_viewer(["a", "b", "c"])
        viewer.start()
        queue = CommandQueue()
        assert queue.execute(NextImage(), viewer)
        assert queue.execute(NextImage(), viewer)
        assert queue.execute(PrevImage(), viewer)
        assert current_path(viewer) == "b"
        assert queue.execute(FirstImage(), viewer)
        assert current_path(viewer) == "a"
        assert len(queue.history) == 4

    def test_rotate_command(self, make_viewer):
        viewer = make_viewer(["a"])
        viewer.start()
        assert Rotate(-90).execute(viewer)
        assert viewer.current.cur_rot == 270

    def test_note_command(self, make_viewer):
        viewer = make_viewer(["a"])
        viewer.start()
        ToggleNote(7).execute(viewer)
        assert viewer.state.notes.lists[7] == ["a"]

    def test_delete_command(self, make_viewer, deleted):
        viewer = make_viewer(["a", "b"])
        viewer.start()
        assert DeleteImage().execute(viewer)
        assert deleted == ["a"]

    def test_close_ends_session(self, make_viewer):
        viewer = make_viewer(["a"])
        viewer.start()
        with pytest.raises(SessionEnded):
            CommandQueue().execute(CloseApp(), viewer)

    def test_commands_need_an_image(self, make_viewer):
        viewer = make_viewer(["a"])
        assert NextImage().can_execute(viewer) is False
        assert CommandQueue().execute(Rotate(90), viewer) is False
