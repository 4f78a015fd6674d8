"""Blocks: single AWS operations exposed to the host, and the registry holding them."""

from .block import Block
from .registry import BlockRegistry, get_block_registry

__all__ = [
    'Block',
    'BlockRegistry',
    'get_block_registry',
]
