# app.py
import logging
import os

import flet as ft

from sudoku_game import sudoku_game_entry
from sudoku_utils import DIFFICULTY_CLUES, DIFFICULTY_LABELS

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8550


def configure_logging():
    level_name = os.environ.get("SUDOKU_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# --- FLET APP MAIN FUNCTION (Routing and Views) ---
def main(page: ft.Page):
    page.title = "🧩 Sudoku"
    page.vertical_alignment = ft.MainAxisAlignment.START
    page.horizontal_alignment = ft.CrossAxisAlignment.CENTER
    page.theme_mode = ft.ThemeMode.LIGHT
    page.scroll = ft.ScrollMode.ADAPTIVE

    def go_home(e=None):
        page.on_keyboard_event = None
        page.go("/")

    def view_home_page():
        return ft.View(
            "/",
            [
                ft.Text("🧩 Sudoku", size=32, weight="bold", text_align="center"),
                ft.Text("Fill the grid so every row, column and 3×3 box holds 1-9 once.", size=18, text_align="center"),
                ft.Column(
                    [
                        ft.ElevatedButton("▶ Play", on_click=lambda _: page.go("/game/sudoku"), width=250, height=50),
                        ft.ElevatedButton("📜 Rules", on_click=lambda _: page.go("/rules/sudoku"), width=250, height=50),
                    ],
                    alignment=ft.MainAxisAlignment.CENTER,
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    spacing=10
                )
            ],
            vertical_alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=20,
            scroll=ft.ScrollMode.AUTO
        )

    def view_rules_page():
        levels = ", ".join(f"{DIFFICULTY_LABELS[lvl]} ({clues})" for lvl, clues in DIFFICULTY_CLUES.items())
        return ft.View(
            "/rules/sudoku",
            [
                ft.Text("📜 Sudoku rules", size=28, weight="bold"),
                ft.Text("🎯 Fill the 9×9 grid with the digits 1 to 9 so that no digit repeats in a row, a column or a 3×3 box.", size=16, text_align=ft.TextAlign.CENTER),
                ft.Text(f"📊 Difficulty sets how many numbers are given: {levels}.", size=16, text_align=ft.TextAlign.CENTER),
                ft.Text("🕹 Click a cell or move with the arrow keys, then type 1-9. 0, Backspace or Delete clears a cell; Escape goes back to the level menu.", size=16, text_align=ft.TextAlign.CENTER),
                ft.Text("🟢 Correct numbers turn green, 🔴 wrong ones red. Every puzzle has exactly one solution.", size=16, text_align=ft.TextAlign.CENTER),
                ft.ElevatedButton("▶ Play", on_click=lambda _: page.go("/game/sudoku"), width=250, height=50),
                ft.ElevatedButton("🏠 Home", on_click=go_home, width=250, height=50),
            ],
            vertical_alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=15,
            scroll=ft.ScrollMode.AUTO
        )

    def view_game():
        return ft.View(
            "/game/sudoku",
            sudoku_game_entry(page, go_home),
            scroll=ft.ScrollMode.ADAPTIVE,
            vertical_alignment=ft.MainAxisAlignment.START,
            padding=10
        )

    routes = {
        "/": view_home_page,
        "/rules/sudoku": view_rules_page,
        "/game/sudoku": view_game,
    }

    def route_change(e: ft.RouteChangeEvent):
        target_route = e.route
        if page.views and len(page.views) == 1 and page.views[0].route == target_route:
            page.update()
            return

        build_view = routes.get(target_route)
        if build_view is None:
            logger.warning("Unknown route %s, falling back to home", target_route)
            target_route = "/"
            build_view = view_home_page

        page.views.clear()
        page.views.append(build_view())
        page.update()
        logger.debug("Route changed to %s", target_route)

    def view_pop(e: ft.ViewPopEvent):
        if e.view is not None and e.view in page.views:
            page.views.remove(e.view)
        page.go(page.views[-1].route if page.views else "/")

    page.on_route_change = route_change
    page.on_view_pop = view_pop
    page.go(page.route if page.route else "/")


if __name__ == "__main__":
    configure_logging()
    ft.app(
        target=main,
        port=int(os.environ.get("PORT", DEFAULT_PORT)),
        view=ft.AppView.WEB_BROWSER if os.environ.get("SUDOKU_VIEW", "web") == "web" else ft.AppView.FLET_APP,
    )
