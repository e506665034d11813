# sudoku_game.py
import logging

import flet as ft

from sudoku_export import save_sudoku
from sudoku_session import PlaySession
from sudoku_utils import DIFFICULTY_CLUES, DIFFICULTY_LABELS, EMPTY, SIZE, BOX, GenerationFailure

logger = logging.getLogger(__name__)

# --- Sizing Constants ---
FONT_SIZE_MEDIUM = 16
FONT_SIZE_LARGE = 18
FONT_SIZE_XLARGE = 20 # For cell numbers
FONT_SIZE_TITLE = 22
BUTTON_HEIGHT_NORMAL = 40
TITLE_ICON_SIZE = 26
SUDOKU_CELL_SIZE = 38
SUDOKU_GRID_BORDER_THICKNESS_NORMAL = 1
SUDOKU_GRID_BORDER_THICKNESS_BOLD = 2.5
NUMBER_PALETTE_BUTTON_SIZE = 40

# Tiers that outline clashing cells while playing
CONFLICT_HINT_LEVELS = {1, 2}

KEY_DIRECTIONS = {
    "Arrow Up": "up",
    "Arrow Down": "down",
    "Arrow Left": "left",
    "Arrow Right": "right",
}
CLEAR_KEYS = {"0", "Backspace", "Delete"}

GIVEN_NUMBER_COLOR = ft.Colors.BLACK87
CORRECT_NUMBER_COLOR = ft.Colors.GREEN_ACCENT_700
WRONG_NUMBER_COLOR = ft.Colors.RED_ACCENT_700
SOLUTION_SHOWN_COLOR = ft.Colors.BLUE_ACCENT_700
CONFLICT_BORDER_COLOR = ft.Colors.RED_ACCENT_700
DEFAULT_BORDER_COLOR = ft.Colors.BLACK54
SELECTED_CELL_BG_COLOR = ft.Colors.LIGHT_BLUE_ACCENT_100
GIVEN_CELL_BG_COLOR = ft.Colors.BLUE_GREY_50
NORMAL_CELL_BG_COLOR = ft.Colors.WHITE

STATUS_COLORS = {
    "given": GIVEN_NUMBER_COLOR,
    "correct": CORRECT_NUMBER_COLOR,
    "wrong": WRONG_NUMBER_COLOR,
    "empty": CORRECT_NUMBER_COLOR,
}


def _cell_border(r, c, color):
    def side(is_bold):
        return ft.border.BorderSide(
            SUDOKU_GRID_BORDER_THICKNESS_BOLD if is_bold else SUDOKU_GRID_BORDER_THICKNESS_NORMAL, color
        )
    return ft.border.Border(
        top=side(r % BOX == 0),
        left=side(c % BOX == 0),
        right=side(c % BOX == BOX - 1),
        bottom=side(r % BOX == BOX - 1),
    )


def sudoku_game_logic(page: ft.Page, go_home_fn):
    state = {
        "session": None,
        "step": "difficulty_select",  # playing, game_over, solution_shown
        "conflicting_cells": set(),
    }

    status_text = ft.Text("Choose a difficulty level.", size=FONT_SIZE_LARGE, text_align=ft.TextAlign.CENTER)
    sudoku_grid_container = ft.Column(spacing=0, horizontal_alignment=ft.CrossAxisAlignment.CENTER, visible=False)
    number_palette = ft.Column(visible=False, horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=5)
    action_area = ft.Column(horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=10)
    main_column = ft.Column(
        expand=True,
        scroll=ft.ScrollMode.ADAPTIVE,
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        spacing=10
    )

    text_controls = [[None for _ in range(SIZE)] for _ in range(SIZE)]
    cell_containers = [[None for _ in range(SIZE)] for _ in range(SIZE)]

    def update_cell_display(r, c):
        session = state["session"]
        solution_shown = state["step"] == "solution_shown"
        cell_text = text_controls[r][c]
        cell_container = cell_containers[r][c]
        value = session.working[r][c]
        status = session.cell_status(r, c)

        cell_text.value = str(value) if value != EMPTY else ""
        if solution_shown and status != "given":
            cell_text.color = SOLUTION_SHOWN_COLOR
        else:
            cell_text.color = STATUS_COLORS[status]
        cell_text.weight = ft.FontWeight.BOLD if status == "given" else ft.FontWeight.NORMAL

        is_selected = session.cursor == (r, c) and state["step"] == "playing"
        if is_selected:
            cell_container.bgcolor = SELECTED_CELL_BG_COLOR
        elif status == "given":
            cell_container.bgcolor = GIVEN_CELL_BG_COLOR
        else:
            cell_container.bgcolor = NORMAL_CELL_BG_COLOR

        is_conflicting = (r, c) in state["conflicting_cells"] and not solution_shown
        cell_container.border = _cell_border(r, c, CONFLICT_BORDER_COLOR if is_conflicting else DEFAULT_BORDER_COLOR)

    def refresh_grid_display():
        if not state["session"]:
            return
        for r in range(SIZE):
            for c in range(SIZE):
                update_cell_display(r, c)

    def create_sudoku_grid_ui():
        sudoku_grid_container.controls.clear()
        grid_rows = []
        for r_idx in range(SIZE):
            row_controls = []
            for c_idx in range(SIZE):
                cell_text = ft.Text(size=FONT_SIZE_XLARGE, text_align=ft.TextAlign.CENTER)
                cell_container = ft.Container(
                    content=cell_text,
                    width=SUDOKU_CELL_SIZE, height=SUDOKU_CELL_SIZE,
                    alignment=ft.alignment.center, data=(r_idx, c_idx),
                    on_click=lambda e, r=r_idx, c=c_idx: handle_cell_click(r, c),
                    border=_cell_border(r_idx, c_idx, DEFAULT_BORDER_COLOR),
                )
                text_controls[r_idx][c_idx] = cell_text
                cell_containers[r_idx][c_idx] = cell_container
                row_controls.append(cell_container)
            grid_rows.append(ft.Row(row_controls, spacing=0, alignment=ft.MainAxisAlignment.CENTER))
        sudoku_grid_container.controls.extend(grid_rows)
        sudoku_grid_container.visible = True

    def handle_cell_click(r_clicked, c_clicked):
        if state["step"] != "playing":
            return
        state["session"].cursor = (r_clicked, c_clicked)
        number_palette.visible = not state["session"].is_given(r_clicked, c_clicked)
        refresh_grid_display()
        page.update()

    def enter_number(num):
        if state["step"] != "playing":
            return
        session = state["session"]
        if session.is_given(*session.cursor):
            return
        session.place_at_cursor(num)
        if session.difficulty in CONFLICT_HINT_LEVELS:
            state["conflicting_cells"] = session.conflicts()
        else:
            state["conflicting_cells"] = set()

        if session.is_won():
            state["step"] = "game_over"
            status_text.value = "🎉 Well done! You solved the sudoku!"
            logger.info("Puzzle solved at difficulty %s", session.difficulty)
            update_ui_layout()
            return
        refresh_grid_display()
        page.update()

    def move_cursor(direction):
        if state["step"] != "playing":
            return
        r, c = state["session"].move_cursor(direction)
        number_palette.visible = not state["session"].is_given(r, c)
        refresh_grid_display()
        page.update()

    def handle_keyboard(e: ft.KeyboardEvent):
        if e.key == "Escape":
            reset_to_difficulty_select()
        elif e.key in KEY_DIRECTIONS:
            move_cursor(KEY_DIRECTIONS[e.key])
        elif e.key in CLEAR_KEYS:
            enter_number(EMPTY)
        elif len(e.key) == 1 and e.key.isdigit():
            enter_number(int(e.key))

    def create_number_palette():
        number_palette.controls.clear()

        def number_button(num):
            return ft.ElevatedButton(
                str(num), on_click=lambda e: enter_number(num),
                width=NUMBER_PALETTE_BUTTON_SIZE, height=NUMBER_PALETTE_BUTTON_SIZE,
                style=ft.ButtonStyle(padding=0)
            )

        row1_controls = [number_button(i) for i in range(1, 6)]
        row2_controls = [number_button(i) for i in range(6, 10)]
        row2_controls.append(ft.ElevatedButton(
            content=ft.Icon(ft.Icons.BACKSPACE_OUTLINED, size=NUMBER_PALETTE_BUTTON_SIZE*0.6),
            on_click=lambda e: enter_number(EMPTY),
            width=NUMBER_PALETTE_BUTTON_SIZE, height=NUMBER_PALETTE_BUTTON_SIZE,
            tooltip="Clear cell", style=ft.ButtonStyle(padding=0)
        ))
        number_palette.controls.extend([
            ft.Row(controls=row1_controls, alignment=ft.MainAxisAlignment.CENTER, spacing=5),
            ft.Row(controls=row2_controls, alignment=ft.MainAxisAlignment.CENTER, spacing=5),
        ])

    def start_new_game(difficulty):
        status_text.value = "Generating puzzle..."
        page.update()
        try:
            session = PlaySession.new(difficulty)
        except GenerationFailure as exc:
            logger.error("Could not generate a %s puzzle: %s", DIFFICULTY_LABELS[difficulty], exc)
            status_text.value = "Could not generate a puzzle. Please try again."
            update_ui_layout()
            return
        state["session"] = session
        state["conflicting_cells"] = set()
        state["step"] = "playing"
        status_text.value = f"{DIFFICULTY_LABELS[difficulty]} game started. Good luck!"
        create_sudoku_grid_ui()
        number_palette.visible = not session.is_given(*session.cursor)
        update_ui_layout()

    def save_puzzle(e):
        try:
            path = save_sudoku(state["session"].original)
        except OSError as exc:
            logger.error("Saving sudoku failed: %s", exc)
            status_text.value = f"Could not save the sudoku: {exc}"
        else:
            status_text.value = f"Sudoku saved to {path}. Have a good game!"
        page.update()

    def show_solution(e):
        if state["step"] in ["playing", "game_over"]:
            state["session"].reveal_solution()
            state["step"] = "solution_shown"
            state["conflicting_cells"] = set()
            status_text.value = "💡 Here is the solution."
            update_ui_layout()

    def update_ui_layout():
        main_column.controls.clear()
        title_bar = ft.Row(
            [
                ft.Text("🧩 Sudoku", size=FONT_SIZE_TITLE, weight=ft.FontWeight.BOLD, expand=True, text_align=ft.TextAlign.CENTER),
                ft.IconButton(ft.Icons.HOME_ROUNDED, tooltip="Back to the menu", on_click=lambda e: go_home_fn(), icon_size=TITLE_ICON_SIZE)
            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN, vertical_alignment=ft.CrossAxisAlignment.CENTER
        )
        main_column.controls.append(title_bar)
        main_column.controls.append(status_text)
        action_area.controls.clear()

        if state["step"] == "difficulty_select":
            sudoku_grid_container.visible = False
            number_palette.visible = False
            action_area.controls.append(ft.Text("Choose a difficulty level:", size=FONT_SIZE_MEDIUM))
            for level, clues in DIFFICULTY_CLUES.items():
                action_area.controls.append(ft.ElevatedButton(
                    f"{level}. {DIFFICULTY_LABELS[level]} ({clues} numbers)",
                    on_click=lambda e, lvl=level: start_new_game(lvl),
                    width=220, height=BUTTON_HEIGHT_NORMAL,
                ))
        else:
            refresh_grid_display()
            sudoku_grid_container.visible = True
            if state["step"] == "playing":
                if not number_palette.controls:
                    create_number_palette()
                action_area.controls.extend([
                    ft.ElevatedButton("💾 Save puzzle", on_click=save_puzzle, width=200, height=BUTTON_HEIGHT_NORMAL),
                    ft.ElevatedButton("🏳️ Show solution", on_click=show_solution, width=220, height=BUTTON_HEIGHT_NORMAL, bgcolor=ft.Colors.AMBER_200),
                    ft.ElevatedButton("🔄 New game", on_click=lambda e: reset_to_difficulty_select(), width=250, height=BUTTON_HEIGHT_NORMAL),
                ])
            else:
                number_palette.visible = False
                action_area.controls.extend([
                    ft.ElevatedButton("💾 Save puzzle", on_click=save_puzzle, width=200, height=BUTTON_HEIGHT_NORMAL),
                    ft.ElevatedButton("🔄 Play again", on_click=lambda e: reset_to_difficulty_select(), width=200, height=BUTTON_HEIGHT_NORMAL),
                ])

        main_column.controls.append(sudoku_grid_container)
        main_column.controls.append(number_palette)
        main_column.controls.append(action_area)
        page.update()

    def reset_to_difficulty_select():
        state["step"] = "difficulty_select"
        state["session"] = None
        state["conflicting_cells"] = set()
        status_text.value = "Choose a difficulty level to start."
        sudoku_grid_container.controls.clear()
        sudoku_grid_container.visible = False
        number_palette.visible = False
        update_ui_layout()

    page.on_keyboard_event = handle_keyboard
    reset_to_difficulty_select()
    return [ft.Container(content=main_column, expand=True, alignment=ft.alignment.top_center, padding=ft.padding.all(10))]


# --- GAME ENTRY POINT ---
def sudoku_game_entry(page: ft.Page, go_home_fn):
    return sudoku_game_logic(page, go_home_fn)
