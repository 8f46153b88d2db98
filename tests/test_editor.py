"""Tests for the editor state reducers."""

import pytest

from iconmatrix import (
    Animation,
    EditorState,
    Frame,
    History,
    OnionSkinMode,
    Tool,
    TweenEasing,
    flood_fill,
)


@pytest.fixture
def state() -> EditorState:
    return EditorState()


@pytest.fixture
def three_frame_state(three_frames) -> EditorState:
    return EditorState().load_frames(list(three_frames))


class TestEditorDefaults:
    """A fresh editor."""

    def test_defaults(self, state):
        assert state.grid_size == (9, 9)
        assert len(state.animation) == 1
        assert state.current_frame == Frame.empty(9, 9)
        assert state.fps == 12
        assert state.loop
        assert state.tool == Tool.BRUSH
        assert state.brush_brightness == 1.0
        assert state.tween_easing == TweenEasing.SMOOTHSTEP
        assert not state.history.can_undo

    def test_reducers_do_not_mutate(self, state):
        state.apply_tool(0, 0)
        assert state.current_frame == Frame.empty(9, 9)


class TestEditorTools:
    """Brush, eraser and fill."""

    def test_brush(self, state):
        state = state.set_brush_brightness(0.6).apply_tool(1, 2)
        assert state.current_frame[1, 2] == 0.6

    def test_eraser(self, state):
        state = state.apply_tool(1, 2).set_tool(Tool.ERASER).apply_tool(1, 2)
        assert state.current_frame[1, 2] == 0.0

    def test_fill(self, state):
        state = state.set_tool("fill").set_brush_brightness(0.5).apply_tool(0, 0)
        assert state.current_frame == Frame.empty(9, 9).filled(0.5)

    def test_fill_same_value_is_noop(self, state):
        state = state.set_tool(Tool.FILL).set_brush_brightness(0.0)
        assert state.apply_tool(4, 4) is state

    def test_brush_out_of_bounds(self, state):
        with pytest.raises(IndexError):
            state.apply_tool(9, 9)

    def test_brightness_clamped(self, state):
        assert state.set_brush_brightness(1.5).brush_brightness == 1.0
        assert state.set_brush_brightness(-1).brush_brightness == 0.0

    def test_clear_and_fill_frame(self, state):
        state = state.set_brush_brightness(0.3).fill_frame()
        assert state.current_frame == Frame.empty(9, 9).filled(0.3)
        assert state.clear_frame().current_frame == Frame.empty(9, 9)

    def test_unknown_tool(self, state):
        with pytest.raises(ValueError):
            state.set_tool("spray")


class TestEditorPlayback:
    """Playback settings."""

    def test_fps_clamped(self, state):
        assert state.set_fps(0).fps == 1
        assert state.set_fps(45).fps == 30
        assert state.set_fps(24).fps == 24

    def test_single_frame_never_plays(self, state):
        assert not state.toggle_playing().is_playing

    def test_toggle_playing(self, three_frame_state):
        playing = three_frame_state.set_paused(True).toggle_playing()
        assert playing.is_playing
        assert not playing.is_paused
        assert not playing.toggle_playing().is_playing

    def test_toggle_loop(self, state):
        assert not state.toggle_loop().loop

    def test_current_index_clamped(self, three_frame_state):
        assert three_frame_state.set_current_frame_index(10).current_frame_index == 2
        assert three_frame_state.set_current_frame_index(-3).current_frame_index == 0


class TestEditorFrames:
    """Frame management."""

    def test_add_frame_selects_new_frame(self, state):
        state = state.apply_tool(0, 0).add_frame()
        assert len(state.animation) == 2
        assert state.current_frame_index == 1
        assert state.current_frame == Frame.empty(9, 9)

    def test_duplicate_frame(self, state):
        state = state.apply_tool(0, 0).duplicate_frame()
        assert state.current_frame_index == 1
        assert state.animation[0] == state.animation[1]

    def test_delete_frame(self, three_frame_state):
        state = three_frame_state.set_current_frame_index(2).delete_frame()
        assert len(state.animation) == 2
        assert state.current_frame_index == 1

    def test_delete_last_frame_ignored(self, state):
        assert state.delete_frame() is state

    def test_load_pattern(self, three_frame_state):
        state = three_frame_state.set_current_frame_index(2).load_pattern(Frame([[1, 0]]))
        assert len(state.animation) == 1
        assert state.current_frame_index == 0
        assert state.grid_size == (1, 2)

    def test_load_empty_frames_ignored(self, state):
        assert state.load_frames([]) is state

    def test_set_grid_size(self, state):
        state = state.apply_tool(8, 8).apply_tool(0, 0).set_grid_size(5, 7)
        assert state.grid_size == (5, 7)
        assert state.current_frame[0, 0] == 1.0

    @pytest.mark.parametrize(
        "current, from_index, to_index, expected",
        [(0, 0, 2, 2), (1, 0, 2, 0), (2, 0, 1, 2), (0, 2, 0, 1), (1, 2, 0, 2), (2, 2, 0, 0)],
    )
    def test_reorder_keeps_current_frame(self, three_frame_state, current, from_index, to_index, expected):
        state = three_frame_state.set_current_frame_index(current)
        shown = state.current_frame
        reordered = state.reorder_frames(from_index, to_index)
        assert reordered.current_frame_index == expected
        assert reordered.current_frame == shown

    def test_reorder_clears_selection(self, three_frame_state):
        state = three_frame_state.select_frame_range(0, 1).reorder_frames(0, 2)
        assert state.selected_frame_indices == ()


class TestEditorSelectionAndTween:
    """Keyframe selection and tween generation."""

    def test_select(self, three_frame_state):
        assert three_frame_state.select_frame(1).selected_frame_indices == (1,)

    def test_toggle_selection(self, three_frame_state):
        state = three_frame_state.toggle_frame_selection(0).toggle_frame_selection(2)
        assert state.selected_frame_indices == (0, 2)
        assert state.toggle_frame_selection(0).selected_frame_indices == (2,)

    def test_select_range(self, three_frame_state):
        assert three_frame_state.select_frame_range(2, 0).selected_frame_indices == (0, 1, 2)
        assert three_frame_state.select_frame_range(0, 2).clear_selection().selected_frame_indices == ()

    def test_generate_tween(self, three_frame_state):
        state = three_frame_state.set_tween_easing("linear").select_frame_range(0, 2)
        state = state.generate_tween(0, 2, 3)
        assert [f[0, 0] for f in state.animation] == pytest.approx([0.0, 0.25, 0.5, 0.75, 1.0])
        assert state.selected_frame_indices == ()

    @pytest.mark.parametrize("from_index, to_index, count", [(2, 0, 3), (1, 1, 3), (0, 2, 0)])
    def test_invalid_tween_ignored(self, three_frame_state, from_index, to_index, count):
        assert three_frame_state.generate_tween(from_index, to_index, count) is three_frame_state


class TestOnionSkin:
    """Neighbour frame overlays."""

    def test_disabled(self, three_frame_state):
        assert three_frame_state.set_current_frame_index(1).onion_skin_layers == []

    def test_both_neighbours(self, three_frame_state):
        state = three_frame_state.set_current_frame_index(1).set_onion_skin_enabled(True)
        layers = state.onion_skin_layers
        assert [layer.kind for layer in layers] == ["previous", "next"]
        assert layers[0].frame == state.animation[0]
        assert layers[0].opacity == pytest.approx(0.3)
        assert layers[1].frame == state.animation[2]
        assert layers[1].opacity == pytest.approx(0.15)

    def test_edges(self, three_frame_state):
        state = three_frame_state.toggle_onion_skin()
        assert [layer.kind for layer in state.onion_skin_layers] == ["next"]
        state = state.set_current_frame_index(2)
        assert [layer.kind for layer in state.onion_skin_layers] == ["previous"]

    def test_mode(self, three_frame_state):
        state = three_frame_state.set_current_frame_index(1).set_onion_skin_enabled(True)
        state = state.set_onion_skin_mode(OnionSkinMode.NEXT)
        assert [layer.kind for layer in state.onion_skin_layers] == ["next"]
        state = state.set_onion_skin_mode("previous")
        assert [layer.kind for layer in state.onion_skin_layers] == ["previous"]

    def test_opacity_clamped(self, state):
        state = state.set_onion_skin_opacity(150, -10)
        assert state.onion_skin_previous_opacity == 100
        assert state.onion_skin_next_opacity == 0


class TestHistory:
    """Undo and redo."""

    def test_undo_restores_snapshot(self, state):
        edited = state.save_history().apply_tool(0, 0)
        restored = edited.undo()
        assert restored.current_frame == Frame.empty(9, 9)
        assert not restored.history.can_undo

    def test_redo(self, state):
        state = state.save_history().apply_tool(0, 0).save_history().apply_tool(1, 1)
        state = state.undo().undo()
        assert state.current_frame == Frame.empty(9, 9)
        state = state.redo()
        assert state.current_frame[0, 0] == 1.0
        assert state.current_frame[1, 1] == 0.0

    def test_redo_returns_to_latest_edit(self, state):
        edited = state.save_history().apply_tool(0, 0)
        assert edited.undo().redo().animation == edited.animation
        assert not edited.undo().redo().history.can_redo

    def test_undo_without_history(self, state):
        assert state.undo() is state
        assert state.redo() is state

    def test_save_discards_redo(self, state):
        state = state.save_history().apply_tool(0, 0).save_history().apply_tool(1, 1)
        state = state.undo().undo().save_history()
        assert len(state.history.past) == 1
        assert not state.history.can_redo

    def test_history_bounded(self, state):
        for col in range(60):
            state = state.save_history().apply_tool(0, col % 9)
        assert len(state.history.past) == 50

    def test_explicit_history_limit(self, state):
        history = History().push(state.animation, limit=0)
        assert history.past == ()
        history = History().push(state.animation, limit=1).push(Animation.blank(2, 2), limit=1)
        assert history.past == (Animation.blank(2, 2),)

    def test_undo_clamps_current_index(self, state):
        state = state.save_history().add_frame().add_frame()
        assert state.current_frame_index == 2
        state = state.undo()
        assert len(state.animation) == 1
        assert state.current_frame_index == 0


class TestEditingScenario:
    """A complete editing session."""

    def test_fill_then_tween(self, state):
        updates = flood_fill(state.current_frame, 4, 4, 1.0)
        assert len(updates) == 81
        state = state.save_history().set_pixels_batch(updates)
        assert state.current_frame == Frame.empty(9, 9).filled(1.0)

        state = state.add_frame().add_frame()
        assert len(state.animation) == 3
        state = state.set_tween_easing(TweenEasing.LINEAR).generate_tween(0, 2, 3)
        values = [frame[4, 4] for frame in state.animation]
        assert values == pytest.approx([1.0, 0.75, 0.5, 0.25, 0.0])

        state = state.undo()
        assert state.animation == Animation.blank(9, 9)
