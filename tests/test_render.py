"""Tests for the render projection."""

from datetime import datetime

import pytest
from rich.cells import cell_len

from termdash.render import (
    DASHBOARD_TITLE,
    DashboardContext,
    draw_box,
    split_cells,
    tail_cells,
    render_frame,
    sidebar_width,
    window_offset,
)
from termdash.types import PanelId, Preview


@pytest.fixture
def context():
    return DashboardContext(
        now=datetime(2024, 5, 17, 9, 30, 5),
        hostname="devbox",
        cwd="/home/you",
        hint="↑/k/↓/j Move  q/Ctrl+C Quit",
        quick_actions=("[Enter] Launch selection",),
    )


class TestGeometry:
    @pytest.mark.parametrize("width,expected", [(80, 26), (50, 24), (120, 40), (60, 24)])
    def test_sidebar_width(self, width, expected):
        assert sidebar_width(width) == expected

    def test_sidebar_never_exceeds_screen(self):
        assert sidebar_width(10) == 10

    @pytest.mark.parametrize(
        "count,cursor,visible,expected",
        [(10, 9, 3, 7), (10, 0, 3, 0), (10, 4, 3, 2), (2, 1, 5, 0), (5, 3, 0, 0)],
    )
    def test_window_offset(self, count, cursor, visible, expected):
        assert window_offset(count, cursor, visible) == expected

    def test_draw_box(self):
        box = draw_box("Apps", ["one"], 12, 4)
        assert box[0] == "╭─ Apps ───╮"
        assert box[1] == "│one       │"
        assert box[-1] == "╰──────────╯"
        assert len(box) == 4


class TestCellHelpers:
    def test_split_ascii(self):
        assert split_cells("abcdef", 2) == ("ab", "cdef")

    def test_split_pads_short_text(self):
        assert split_cells("ab", 4) == ("ab  ", "")

    def test_split_wide_characters_by_cell(self):
        assert split_cells("日本語", 4) == ("日本", "語")

    def test_split_inside_wide_character(self):
        left, right = split_cells("日本語", 3)
        assert left == "日 "
        assert right == " 語"
        assert cell_len(left) == 3

    def test_tail_cells(self):
        assert tail_cells("abcdef", 3) == "def"
        assert tail_cells("日本語", 5) == "本語"
        assert tail_cells("ab", 5) == "ab"


class TestRenderFrame:
    @pytest.mark.parametrize("width,height", [(80, 24), (120, 40), (40, 10), (24, 5), (200, 60)])
    def test_every_line_fills_the_grid(self, state, context, width, height):
        frame = render_frame(state, context, width, height)
        assert frame.width == width
        assert frame.height == height
        assert len(frame.lines) == height
        assert all(cell_len(line) == width for line in frame.lines)

    def test_zero_height(self, state, context):
        frame = render_frame(state, context, 80, 0)
        assert frame.lines == ()
        assert frame.text == ""

    def test_pure(self, state, context):
        assert render_frame(state, context, 80, 24) == render_frame(state, context, 80, 24)

    def test_sidebar_lists_panels_with_focus_marker(self, state, context):
        text = render_frame(state, context, 100, 30).text
        assert "● Directories" in text
        assert "Applications" in text
        assert "● Applications" not in text
        assert "❯ Category: Widget" in text
        assert "❯ LazyGit" in text

    def test_focus_marker_moves(self, state, context):
        state.focus.cycle_focus()
        text = render_frame(state, context, 100, 30).text
        assert "● Applications" in text
        assert "● Directories" not in text

    def test_dashboard_pane(self, state, context):
        text = render_frame(state, context, 100, 40).text
        assert DASHBOARD_TITLE in text
        assert "Time: Fri May 17, 2024 09:30:05" in text
        assert "Host: devbox" in text
        assert "Dir:  /home/you" in text
        assert "App: LazyGit" in text
        assert "Cmd: lazygit" in text
        assert "[Enter] Launch selection" in text

    def test_selection_follows_applications_cursor(self, state, context):
        state.focus.cycle_focus()
        state.focus.move_cursor(1)
        text = render_frame(state, context, 100, 40).text
        assert "App: Clock" in text
        assert "❯ Clock" in text

    def test_preview_replaces_dashboard(self, state, context):
        state.preview = Preview(title="Category Preview: Widget", body="Widget sources")
        text = render_frame(state, context, 100, 30).text
        assert "Category Preview: Widget" in text
        assert "Widget sources" in text
        assert DASHBOARD_TITLE not in text

    def test_long_preview_is_wrapped(self, state, context):
        state.preview = Preview(title="t", body="word " * 100)
        frame = render_frame(state, context, 80, 24)
        assert all(cell_len(line) == 80 for line in frame.lines)
        assert sum("word" in line for line in frame.lines) > 3

    def test_modal_in_editing_mode(self, state, context):
        state.focus.cycle_focus()
        form = state.open_form()
        form.insert("htop")
        text = render_frame(state, context, 100, 30).text
        assert "Add Application" in text
        assert "Name" in text
        assert "Command" in text
        assert "htop▏" in text

    def test_footer(self, state, context):
        state.status = "LazyGit exited"
        frame = render_frame(state, context, 100, 30)
        assert frame.lines[-1].startswith(" LazyGit exited  │  ↑/k/↓/j Move")
        roles = {h.role for h in frame.highlights if h.row == 29}
        assert roles == {"status", "muted"}

    def test_cursor_highlights(self, state, context):
        frame = render_frame(state, context, 100, 30)
        cursor_rows = {h.row: h.role for h in frame.highlights if h.role in ("cursor", "cursor_dim")}
        assert cursor_rows[1] == "cursor"
        assert "❯ Category: Widget" in frame.lines[1]
        assert sorted(cursor_rows.values()).count("cursor_dim") == 2

    def test_highlights_stay_inside_lines(self, state, context):
        state.status = "hello"
        frame = render_frame(state, context, 80, 24)
        for h in frame.highlights:
            assert 0 <= h.row < frame.height
            assert 0 <= h.start <= h.end <= len(frame.lines[h.row])

    def test_long_panel_scrolls_to_cursor(self, make_state, sample_config, context):
        sample_config["applications"] = [{"name": f"app{i:02d}", "command": "true"} for i in range(30)]
        state = make_state(sample_config)
        state.focus.cycle_focus()
        for _ in range(29):
            state.focus.move_cursor(1)
        text = render_frame(state, context, 80, 24).text
        assert "❯ app29" in text
        assert "app00" not in text
        assert "App: app29" in text

    def test_empty_panel(self, make_state, sample_config, context):
        sample_config["directories"] = []
        state = make_state(sample_config)
        assert "(empty)" in render_frame(state, context, 80, 24).text
        assert state.panels[PanelId.NAVIGATION].entries == []

    def test_failed_status_uses_error_role(self, state, context):
        state.set_status("Launch failed: LazyGit (exit status 1)", error=True)
        frame = render_frame(state, context, 100, 30)
        roles = {h.role for h in frame.highlights if h.row == 29}
        assert roles == {"error", "muted"}

    @pytest.mark.parametrize("name", ["日本語のアプリ", "🚀 rocket launcher", "x" * 80])
    def test_modal_with_wide_input_keeps_border(self, state, context, name):
        state.focus.cycle_focus()
        state.open_form().insert(name)
        frame = render_frame(state, context, 100, 30)
        assert all(cell_len(line) == 100 for line in frame.lines)
        field_rows = [h for h in frame.highlights if h.role == "field"]
        assert len(field_rows) == 1
        row = field_rows[0]
        line = frame.lines[row.row]
        assert line[row.start - 1] == "│"
        assert line[row.end] == "│"
        assert cell_len(line[: row.start - 1]) == (100 - 64) // 2

    def test_modal_over_wide_sidebar_entry(self, make_state, sample_config, context):
        sample_config["applications"] = [{"name": "日本語" * 12, "command": "true"}] * 20
        state = make_state(sample_config)
        state.focus.cycle_focus()
        state.open_form()
        frame = render_frame(state, context, 100, 30)
        assert all(cell_len(line) == 100 for line in frame.lines)
        for h in frame.highlights:
            if h.role in ("title_focused", "border_focused") and h.start > 0:
                line = frame.lines[h.row]
                assert cell_len(line[: h.start]) == (100 - 64) // 2
                assert line[h.end - 1] in "╮╯"
