from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .nbt import parse_tag_list
from .voxel import BLOCK_COUNT

if TYPE_CHECKING:
    from .nbt import TagListParser


@dataclass(frozen=True)
class DecoderConfig:
    # a palette can't have more useful entries than there are voxels
    max_palette_size: int = BLOCK_COUNT
    water_name: str = "minecraft:water"
    strict_water_layer: bool = True
    parse_tag_list: TagListParser = parse_tag_list


DEFAULT_CONFIG = DecoderConfig()
