from typer import Typer

from .cli.commands import run

app = Typer(add_completion=False)
app.command()(run)


def main():
    app()
