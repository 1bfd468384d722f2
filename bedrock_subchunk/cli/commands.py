from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Annotated

import typer
from click import BadParameter
from msgspec import json
from typer import Context, Option

from .. import __version__
from ..api import loader
from ..api.types import SubchunkRecord
from ..core.config import DecoderConfig
from ..core.errors import CoordinateOutOfRange, SubchunkDecodeError
from ..core.subchunk import decode_subchunk
from ..core.voxel import BLOCK_COUNT, XYZ
from .console import Console

logger = logging.getLogger("bedrock_subchunk")


def _show_version(ctx: Context, value: bool):
    if value:
        print(__version__)
        ctx.exit()


def _show_help(ctx: Context, value: bool):
    if value:
        typer.echo(ctx.get_help())
        ctx.exit()


def run(
    input_path: Annotated[
        Path | None,
        Option(
            "--in",
            "-i",
            help="Raw subchunk record, as stored under its world key",
            show_default="read from stdin",
            metavar="file",
            rich_help_panel="Input & output",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ] = None,
    hex: Annotated[
        bool,
        Option(
            "--hex",
            help="Input is hexadecimal text instead of raw bytes",
            rich_help_panel="Input & output",
        ),
    ] = False,
    as_json: Annotated[
        bool,
        Option(
            "--json",
            help="Print the decoded record as JSON",
            rich_help_panel="Input & output",
        ),
    ] = False,
    coordinates: Annotated[
        XYZ | None,
        Option(
            "--at",
            help="Print the block at a voxel of the subchunk",
            rich_help_panel="Lookup",
            metavar="<X Y Z>",
        ),
    ] = None,
    max_palette_size: Annotated[
        int,
        Option(
            "--max-palette-size",
            help="Largest palette accepted before the record is deemed corrupt",
            rich_help_panel="Decoding",
            min=0,
        ),
    ] = BLOCK_COUNT,
    lenient: Annotated[
        bool,
        Option(
            "--lenient",
            help="Accept waterlogging layers of unexpected shape",
            show_default="reject them as corrupt",
            rich_help_panel="Decoding",
        ),
    ] = False,
    debug: Annotated[
        bool,
        Option(
            "--debug",
            help="Show decoder logs and full tracebacks",
            rich_help_panel="Decoding",
        ),
    ] = False,
    _version: Annotated[
        bool,
        Option("--version", is_eager=True, hidden=True, callback=_show_version),
    ] = False,
    _help: Annotated[
        bool,
        Option("--help", is_eager=True, hidden=True, callback=_show_help),
    ] = False,
):
    logging.basicConfig(format="%(message)s")
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    data = loader.load(input_path, hex=hex)
    config = DecoderConfig(
        max_palette_size=max_palette_size, strict_water_layer=not lenient
    )
    try:
        record = decode_subchunk(data, config)
    except SubchunkDecodeError as e:
        Console.warn("Could not decode subchunk: {error}", error=e, important=True)
        logger.debug("".join(traceback.format_exception(e)))
        raise typer.Exit(1)

    if coordinates:
        _show_block(record, coordinates)
    elif as_json:
        typer.echo(json.format(json.encode(record), indent=2).decode())
    else:
        _show_summary(record)


def _show_block(record: SubchunkRecord, coordinates: XYZ):
    try:
        block = record.block_at(*coordinates)
    except CoordinateOutOfRange as e:
        raise BadParameter(str(e), param_hint="'--at'")

    Console.info("Block at {coordinates}: {block}", coordinates=coordinates, block=block)
    if record.is_waterlogged(*coordinates):
        Console.info("The block is {waterlogged}.", waterlogged="waterlogged")


def _show_summary(record: SubchunkRecord):
    Console.info(
        "Subchunk version {version} with {layers} storage layer(s)",
        version=record.version,
        layers=len(record.layers),
    )
    titles = ("Blocks", "Waterlogged")
    for title, layer in zip(titles, record.layers):
        Console.table(
            f"{title} ({layer.bits_per_index} bits per index)",
            ["Index", "Block state", "Voxels"],
            [
                [str(i), str(state), str(count)]
                for i, (state, count) in enumerate(zip(layer.palette, layer.counts()))
            ],
        )
