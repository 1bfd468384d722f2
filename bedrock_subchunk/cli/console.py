from rich.console import Console as _Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

_print = _Console().print


def _highlight(text: str, color: str, kwargs: dict) -> str:
    if not kwargs:
        return text
    # block states look like markup ("stone[facing=north]"), escape them
    return text.format(**{
        k: f"[bold {color}]{escape(str(v))}[/bold {color}]" for k, v in kwargs.items()
    })


class Console:
    @staticmethod
    def info(text: str, *, important=False, **kwargs):
        text = _highlight(text, "blue", kwargs)
        if important:
            _print(Panel(text, expand=False, border_style="blue"))
        else:
            _print(text)

    @staticmethod
    def warn(text: str, *, important=False, **kwargs):
        text = _highlight(text, "red", kwargs)
        if important:
            _print(Panel(text, expand=False, border_style="red"))
        else:
            _print(text, style="dim red")

    @staticmethod
    def table(title: str, columns: list[str], rows: list[list[str]]):
        table = Table(title=title, title_justify="left")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*map(escape, row))
        _print(table)
