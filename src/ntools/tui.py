from typing import List

from rich.text import Text
from textual.app import App, ComposeResult
from textual.screen import ModalScreen
from textual.widgets import Header, Footer, DataTable, Static, Label, Input
from textual.containers import Container, Grid
from textual.widgets.data_table import ColumnKey

from .bin import BinFile, iter_rows
from .console import OFFSET_STYLE
from .hexdump import ascii_field
from .layout import compute_row_width


class GotoScreen(ModalScreen[str]):
    """A simple screen to prompt for an offset to go to."""

    def compose(self) -> ComposeResult:
        yield Grid(
            Label("Go To Offset", id="goto-label"),
            Input(
                placeholder="Offset (hex)",
                type="text",
                id="offset-input",
                restrict=r"[0-9a-fA-F]+",
                validate_on=["submitted"],
            ),
            id="dialog",
        )

    def on_key(self, event) -> None:
        if event.key == "enter":
            input = self.query_one("#offset-input", Input)
            self.dismiss(input.value)
        elif event.key == "escape":
            self.dismiss("")


class HexView(App):
    CSS = """
    Screen {
        align: center middle;
    }
    #dialog {
        grid-size: 2;
        grid-gutter: 1 2;
        grid-rows: 1fr 3;
        padding: 0 1;
        width: 60;
        height: 11;
        border: thick $background 80%;
        background: $surface;
    }
    #stats {
        dock: top;
        width: 100%;
        height: 3;
        background: $primary;
        content-align: center middle;
    }
    #main-view {
        height: 100%;
        layout: horizontal;
    }
    #hex-view {
        width: 3fr;
        height: 100%;
        border-right: solid $primary;
    }
    #ascii-view {
        width: 1fr;
        height: 100%;
    }
    """

    BINDINGS = [
        ("ctrl+g", "goto_offset", "Go to Offset"),
        ("ctrl+q", "quit", "Quit"),
    ]

    row_width: int
    # The byte offset under the cursor
    offset: int = int(0)
    ignore_change: bool = False
    hex_keys: List[ColumnKey] | None = None
    hex_table: DataTable
    ascii_table: DataTable

    def __init__(self, bf: BinFile) -> None:
        super().__init__()
        self.binfile = bf
        self.row_width = compute_row_width(None)

    def compose(self) -> ComposeResult:
        """Layout the Textual UI elements"""
        yield Header()
        yield Static(id="stats")
        with Container(id="main-view"):
            self.hex_table = DataTable(name="Hex View", id="hex-view", zebra_stripes=True)
            yield self.hex_table
            self.ascii_table = DataTable(
                name="ASCII View", id="ascii-view", zebra_stripes=True, cell_padding=0
            )
            yield self.ascii_table
        yield Footer()

    def on_mount(self) -> None:
        self.row_width = compute_row_width(self.size.width)
        self.ignore_change = True
        self.set_columns()
        self.refresh_display()
        self.ignore_change = False

    def set_columns(self) -> None:
        """One hex column per byte slot, a single column for the ASCII text"""
        self.hex_table.cursor_type = "cell"
        self.ascii_table.cursor_type = "row"
        self.hex_keys = self.hex_table.add_columns(
            *[f"{i:02X}" for i in range(self.row_width)]
        )
        self.ascii_table.add_column("ASCII", width=self.row_width)

    @property
    def rows(self) -> int:
        return self.hex_table.row_count

    def refresh_display(self) -> None:
        stats = self.query_one("#stats", Static)
        self.hex_table.clear()
        self.ascii_table.clear()
        with self.binfile.open() as stream:
            for offset, chunk in iter_rows(stream, self.row_width):
                label = Text(f"{offset:08X}", style=OFFSET_STYLE)
                cells = [f"{b:02X}" for b in chunk]
                cells += [""] * (self.row_width - len(chunk))
                self.hex_table.add_row(*cells, label=label)
                self.ascii_table.add_row(Text(ascii_field(chunk)), label=label)
        stats.update(
            f"File {self.binfile.path} {self.binfile.size} bytes | {self.row_width} bytes per row"
        )

    def move_to(self, offset: int) -> None:
        self.offset = offset
        row = offset // self.row_width
        column = offset % self.row_width
        self.hex_table.move_cursor(row=row, column=column, animate=False, scroll=True)
        self.ascii_table.move_cursor(row=row, animate=False, scroll=True)

    def action_goto_offset(self) -> None:
        """Prompt the user to enter an offset to go to."""

        def new_offset(offset_str: str | None) -> None:
            if not offset_str:
                return
            try:
                offset = int(offset_str, 16)
            except ValueError:
                return
            if 0 <= offset < self.binfile.size:
                self.move_to(offset)

        self.push_screen(GotoScreen(), new_offset)

    def on_data_table_cell_highlighted(self, event: DataTable.CellHighlighted) -> None:
        """Keep the ASCII row in step with the hex cursor"""
        if self.ignore_change or event.data_table.id != "hex-view":
            return
        row = event.coordinate.row
        column = event.coordinate.column
        self.offset = (row * self.row_width) + column
        self.ascii_table.move_cursor(row=row, animate=False, scroll=True)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        """Move the hex cursor to the start of the highlighted ASCII row"""
        if self.ignore_change or event.data_table.id != "ascii-view":
            return
        if event.cursor_row != self.offset // self.row_width:
            self.move_to(event.cursor_row * self.row_width)
