# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import json
from ..common.config import CATALOG_DIR
from ..common.errors import CatalogError, UnknownBlockError
from ..common.models import OperationDescriptor
from .block import Block
from .json_validator import validator
from awslabs.aws_blocks.catalog import __file__ as catalog_root
from loguru import logger
from pathlib import Path
from pydantic import ValidationError
from typing import Any, Optional


class BlockRegistry:
    """Block registry, mapping block ids to blocks."""

    def __init__(self, catalog_dir: Path | None = None):
        """Initialize the registry, loading every catalog file found in catalog_dir."""
        self.blocks: dict[str, Block] = {}

        if catalog_dir is None:
            return

        if not catalog_dir.exists():
            raise CatalogError(f'Catalog directory {catalog_dir} does not exist')

        for file_path in sorted(catalog_dir.glob('*.json')):
            with open(file_path, 'r') as f:
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise CatalogError(
                        f'Catalog {file_path.name} is not valid JSON: {e.msg}',
                        {'file': str(file_path)},
                    ) from e
            self.register_catalog(data, source=file_path.name)

        logger.info(f'Loaded {len(self.blocks)} blocks from {catalog_dir}')

    def register_catalog(self, data: dict[str, Any], source: str = '<memory>') -> list[Block]:
        """Validate a catalog and register each of its blocks."""
        is_valid, errors = validator.validate_data(data)
        if not is_valid:
            raise CatalogError(
                f'Catalog {source} is invalid: {"; ".join(errors)}',
                {'source': source, 'errors': errors},
            )

        registered = []
        for key, block_data in data['blocks'].items():
            try:
                descriptor = OperationDescriptor(service=data['service'], **block_data)
            except ValidationError as e:
                raise CatalogError(
                    f'Block {key} in catalog {source} is invalid: {e}', {'source': source}
                ) from e
            registered.append(self.register(f'{data["app"]}.{key}', descriptor))
        return registered

    def register(self, block_id: str, descriptor: OperationDescriptor) -> Block:
        """Register a single block."""
        if block_id in self.blocks:
            raise CatalogError(f'Block {block_id} is already registered', {'block_id': block_id})

        block = Block(block_id, descriptor)
        self.blocks[block_id] = block
        logger.debug(f'Registered block: {block_id}')
        return block

    def get_block(self, block_id: str) -> Block:
        """Get a block by id."""
        if block_id not in self.blocks:
            raise UnknownBlockError(block_id)

        return self.blocks[block_id]

    def list_blocks(self, app: str | None = None) -> list[Block]:
        """List the registered blocks, optionally restricted to one app."""
        if app is None:
            return list(self.blocks.values())
        prefix = f'{app}.'
        return [block for block_id, block in self.blocks.items() if block_id.startswith(prefix)]

    def apps(self) -> list[str]:
        """Return the names of the apps that have at least one block."""
        return sorted({block_id.split('.', 1)[0] for block_id in self.blocks})

    def pretty_print_blocks(self) -> str:
        """Pretty print all blocks."""
        return '\n'.join(
            [f'* {block.block_id} : {block.descriptor.name}' for block in self.blocks.values()]
        )


registry: Optional[BlockRegistry] = None


def default_catalog_dir() -> Path:
    """Return the catalog directory to load blocks from."""
    if CATALOG_DIR:
        return Path(CATALOG_DIR)
    return Path(catalog_root).parent


def get_block_registry() -> BlockRegistry:
    """Get the global registry instance."""
    global registry

    if registry is None:
        registry = BlockRegistry(default_catalog_dir())
    return registry
