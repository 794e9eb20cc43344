"""
Scribe Terminal Editor.

Keyboard-driven front end for the editor core: article list and trash in a
sidebar, title and markup editor on the right. Content is saved explicitly
(Ctrl+S); switching articles drops unsaved edits.

Usage:
    python tui.py
    python tui.py /article/<id>
    python tui.py --debug
"""

from __future__ import annotations

import sys
from datetime import timedelta

from rich.text import Text
from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import (
    Footer,
    Header,
    Input,
    Label,
    ListItem,
    ListView,
    Static,
    TabbedContent,
    TabPane,
    TextArea,
)

from scribe.backend.core.exceptions import ApplicationError
from scribe.backend.core.logging import get_logger, log_with_source, setup_logging
from scribe.editor.editor import CHARACTER_LIMIT
from scribe.editor.routing import ROOT_ADDRESS
from scribe.editor.workspace import Workspace

logger = get_logger(__name__)

# Sidebar width is stored in pixels; one terminal cell is taken as 8
PIXELS_PER_CELL = 8
SIDEBAR_STEP = 16


def trash_notice(retention: timedelta) -> str:
    days = retention.days
    return f"Moved to trash. It will be deleted after {days} day{'' if days == 1 else 's'}."


class TextAreaEditor:
    """Adapts a Textual TextArea to the editor core's rich-text seam."""

    def __init__(self, text_area: TextArea) -> None:
        self.text_area = text_area

    def get_html(self) -> str:
        return self.text_area.text

    def set_content(self, markup: str) -> None:
        self.text_area.load_text(markup)


class ArticleItem(ListItem):
    def __init__(self, article_id: str, label: str) -> None:
        super().__init__(Label(label))
        self.article_id = article_id


class StatusBar(Static):
    """Character counter, save state and current address."""

    characters: reactive[int] = reactive(0)
    dirty: reactive[bool] = reactive(False)
    saved: reactive[bool] = reactive(False)
    address: reactive[str] = reactive(ROOT_ADDRESS)

    def render(self) -> Text:
        percentage = min(100, self.characters * 100 // CHARACTER_LIMIT)
        colour = "red" if percentage >= 100 else "yellow" if percentage >= 80 else "green"
        if self.saved:
            state = "[green]Saved[/]"
        elif self.dirty:
            state = "[yellow]Unsaved changes[/]"
        else:
            state = "[dim]No changes[/]"
        return Text.from_markup(
            f" [{colour}]{self.characters}/{CHARACTER_LIMIT}[/] characters ({percentage}%) | "
            f"{state} | {self.address}"
        )


class ScribeApp(App):
    """Terminal editor for Scribe articles."""

    TITLE = "Scribe"
    SUB_TITLE = ROOT_ADDRESS

    CSS = """
    #sidebar {
        width: 36;
        border-right: solid $primary;
    }

    #editor-pane {
        width: 1fr;
        padding: 0 1;
    }

    #title-input {
        margin: 0 0 1 0;
    }

    #editor {
        height: 1fr;
        border: solid $primary;
    }

    #placeholder {
        height: 1fr;
        content-align: center middle;
        color: $text-muted;
    }

    StatusBar {
        dock: bottom;
        height: 1;
        background: $surface;
        padding: 0 1;
    }

    TabbedContent {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "new_article", "New"),
        Binding("ctrl+s", "save", "Save"),
        Binding("ctrl+d", "delete", "Delete"),
        Binding("ctrl+e", "export", "Export"),
        Binding("ctrl+r", "restore", "Restore"),
        Binding("ctrl+x", "delete_forever", "Delete forever"),
        Binding("ctrl+t", "toggle_dark", "Dark mode"),
        Binding("ctrl+left", "resize_sidebar(-1)", "Narrower", show=False),
        Binding("ctrl+right", "resize_sidebar(1)", "Wider", show=False),
        Binding("escape", "close_article", "Close", show=False),
        Binding("ctrl+q", "quit", "Quit"),
        Binding("f1", "show_tab('articles')", "Articles", show=True),
        Binding("f2", "show_tab('trash')", "Trash", show=True),
    ]

    def __init__(self, address: str = ROOT_ADDRESS, workspace: Workspace | None = None) -> None:
        super().__init__()
        self._initial_address = address
        self._text_area = TextArea(id="editor")
        self.workspace = workspace or Workspace.open(editor=TextAreaEditor(self._text_area))
        self._scheduler = self.workspace.create_purge_scheduler()
        self._unsubscribe = self.workspace.notifier.subscribe(self._on_change)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            with Vertical(id="sidebar"):
                with TabbedContent(initial="articles"):
                    with TabPane("Articles", id="articles"):
                        yield ListView(id="article-list")
                    with TabPane("Trash", id="trash"):
                        yield ListView(id="trash-list")
            with Vertical(id="editor-pane"):
                yield Input(placeholder="Title", id="title-input")
                yield self._text_area
                yield Static("Select an article or press Ctrl+N to create one", id="placeholder")
        yield StatusBar()
        yield Footer()

    async def on_mount(self) -> None:
        self._apply_preferences()
        await self._refresh_articles()
        await self._refresh_trash()
        self.workspace.session.open_address(self._initial_address)
        self._sync_editor_pane()
        self._scheduler.start()
        self.set_interval(0.5, self._refresh_status)
        log_with_source(logger, "tui", "info", "Editor started", address=self._initial_address)

    async def on_unmount(self) -> None:
        self._unsubscribe()
        await self._scheduler.stop()
        await self.workspace.close()

    # -------------------------------------------------------------------------
    # Change events from the editor core
    # -------------------------------------------------------------------------

    def _on_change(self, event: str, payload: dict) -> None:
        if event == "articles_changed":
            self.call_later(self._refresh_articles)
        elif event == "trash_changed":
            self.call_later(self._refresh_trash)
        elif event == "selection_changed":
            self._sync_editor_pane()
        elif event == "address_changed":
            self.sub_title = payload["address"]
        elif event == "saved":
            self.notify("Saved", timeout=self.workspace.session.save_ack_seconds)
        elif event == "discarded_changes":
            self.notify("Unsaved changes discarded", severity="warning")
        elif event == "persistence_warning":
            self.notify(f"Could not save {payload['key']}; changes kept for this session", severity="warning")
        elif event == "preferences_changed":
            self._apply_preferences()

    async def _refresh_articles(self) -> None:
        list_view = self.query_one("#article-list", ListView)
        await list_view.clear()
        await list_view.extend(
            ArticleItem(article.id, f"{article.title}\n{article.date.isoformat()}")
            for article in self.workspace.articles.list()
        )

    async def _refresh_trash(self) -> None:
        list_view = self.query_one("#trash-list", ListView)
        trash = self.workspace.trash
        await list_view.clear()
        await list_view.extend(
            ArticleItem(item.id, f"{item.title}\ndeletes in {trash.days_remaining(item)}d")
            for item in trash.items()
        )

    def _sync_editor_pane(self) -> None:
        session = self.workspace.session
        editing = session.current_id is not None
        title_input = self.query_one("#title-input", Input)
        title_input.display = editing
        self._text_area.display = editing
        self.query_one("#placeholder").display = not editing
        if editing:
            title_input.value = session.title
        self._refresh_status()

    def _refresh_status(self) -> None:
        session = self.workspace.session
        status = self.query_one(StatusBar)
        status.characters = session.character_count()
        status.dirty = session.is_dirty
        status.saved = session.save_acknowledged
        status.address = session.address

    def _apply_preferences(self) -> None:
        preferences = self.workspace.get_preferences()
        self.theme = "textual-dark" if preferences.dark_mode else "textual-light"
        self.query_one("#sidebar").styles.width = preferences.sidebar_width // PIXELS_PER_CELL

    # -------------------------------------------------------------------------
    # Widget events
    # -------------------------------------------------------------------------

    @on(ListView.Selected, "#article-list")
    def on_article_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, ArticleItem):
            self.workspace.session.select(event.item.article_id)
            self._text_area.focus()

    @on(Input.Changed, "#title-input")
    def on_title_changed(self, event: Input.Changed) -> None:
        if event.value != self.workspace.session.title:
            self.workspace.session.edit_title(event.value)

    @on(TextArea.Changed, "#editor")
    def on_editor_changed(self, event: TextArea.Changed) -> None:
        self.workspace.session.on_editor_change(event.text_area.text)
        self._refresh_status()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def action_show_tab(self, tab_id: str) -> None:
        self.query_one(TabbedContent).active = tab_id

    def action_new_article(self) -> None:
        self.workspace.session.create_new()
        self.action_show_tab("articles")
        self.query_one("#title-input", Input).focus()

    def action_save(self) -> None:
        if not self.workspace.session.save():
            self.notify("Nothing to save", timeout=2)

    def action_delete(self) -> None:
        if self.workspace.delete() is not None:
            self.notify(trash_notice(self.workspace.trash.retention))

    def action_close_article(self) -> None:
        self.workspace.session.clear()

    def _highlighted_trash_id(self) -> str | None:
        item = self.query_one("#trash-list", ListView).highlighted_child
        return item.article_id if isinstance(item, ArticleItem) else None

    def action_restore(self) -> None:
        article_id = self._highlighted_trash_id()
        if article_id is None:
            return
        try:
            article = self.workspace.restore(article_id)
        except ApplicationError as e:
            self.notify(e.message, severity="error")
            return
        self.notify(f"Restored {article.title}")

    def action_delete_forever(self) -> None:
        article_id = self._highlighted_trash_id()
        if article_id is not None and self.workspace.permanently_delete(article_id):
            self.notify("Deleted permanently")

    def action_toggle_dark(self) -> None:
        self.workspace.toggle_dark_mode()

    def action_resize_sidebar(self, direction: int) -> None:
        width = self.workspace.get_preferences().sidebar_width
        self.workspace.set_sidebar_width(width + direction * SIDEBAR_STEP)

    def action_export(self) -> None:
        if self.workspace.session.current_id is None:
            self.notify("Open an article to export it", severity="warning")
            return
        self._export()

    @work(exclusive=True)
    async def _export(self) -> None:
        self.notify("Generating summary...")
        try:
            artifact = await self.workspace.export_current()
            path = artifact.write(self.workspace.export_directory)
        except ApplicationError as e:
            self.notify(e.message, severity="error")
            return
        except OSError as e:
            log_with_source(logger, "tui", "error", "Export could not be written", error=str(e))
            self.notify(f"Export failed: {e.strerror or e}", severity="error")
            return
        self.notify(f"Exported {path.name}")


def main() -> None:
    debug = "--debug" in sys.argv
    setup_logging(level="DEBUG" if debug else "WARNING", enable_console=False)
    address = next((arg for arg in sys.argv[1:] if arg.startswith("/")), ROOT_ADDRESS)
    ScribeApp(address=address).run()


if __name__ == "__main__":
    main()
