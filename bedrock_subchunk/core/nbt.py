"""Little-endian NBT, as Bedrock stores palette entries, via amulet-nbt."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from amulet_nbt import (
    ByteArrayTag,
    ByteTag,
    CompoundTag,
    DoubleTag,
    FloatTag,
    IntArrayTag,
    IntTag,
    ListTag,
    LongArrayTag,
    LongTag,
    ReadOffset,
    ShortTag,
    StringTag,
    bedrock_encoding,
    load_array,
)

from .errors import MalformedPaletteEntry, TruncatedData

if TYPE_CHECKING:
    from collections.abc import Callable

    TagListParser = Callable[[bytes | memoryview, int], tuple[list[dict], int]]


def parse_tag_list(data: bytes | memoryview, count: int) -> tuple[list[dict], int]:
    """Decode `count` compounds from the front of `data`.

    Returns the compounds as plain python values and the number of bytes
    they occupied; anything after them is left alone.
    """
    if count == 0:
        return [], 0

    read_offset = ReadOffset()
    try:
        named_tags = load_array(
            bytes(data), count=count, preset=bedrock_encoding, read_offset=read_offset
        )
    except (IndexError, EOFError) as e:
        # the reader ran past the end of the buffer
        raise TruncatedData(
            f"Palette ends before its {count} entries are complete: {e}"
        ) from e
    except (ValueError, RuntimeError) as e:
        raise MalformedPaletteEntry(f"Palette entries are not valid NBT: {e}") from e

    entries = []
    for position, named_tag in enumerate(named_tags):
        if not isinstance(named_tag.tag, CompoundTag):
            raise MalformedPaletteEntry(
                f"Palette entry {position} is a {type(named_tag.tag).__name__}, "
                + "expected a compound."
            )
        entries.append(from_tag(named_tag.tag))
    return entries, read_offset.offset


def from_tag(tag: Any) -> Any:
    match tag:
        case ByteTag():
            # boolean block properties are stored as bytes
            value = tag.py_int
            return bool(value) if value in (0, 1) else value
        case ShortTag() | IntTag() | LongTag():
            return tag.py_int
        case FloatTag() | DoubleTag():
            return tag.py_float
        case StringTag():
            return tag.py_str
        case ListTag():
            return [from_tag(item) for item in tag]
        case CompoundTag():
            return {key: from_tag(value) for key, value in tag.items()}
        case ByteArrayTag() | IntArrayTag() | LongArrayTag():
            return tag.np_array.tolist()
    raise MalformedPaletteEntry(f"Unsupported NBT tag {type(tag).__name__}.")


def to_tag(value: Any):
    match value:
        case bool():
            return ByteTag(int(value))
        case int():
            return IntTag(value)
        case float():
            return FloatTag(value)
        case str():
            return StringTag(value)
        case list():
            return ListTag([to_tag(item) for item in value])
        case dict():
            return CompoundTag({key: to_tag(item) for key, item in value.items()})
    raise TypeError(f"Cannot store {type(value).__name__} in a palette entry.")


def encode_compound(entry: dict) -> bytes:
    return to_tag(entry).to_nbt(preset=bedrock_encoding, name="")
