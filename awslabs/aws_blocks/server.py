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
import os
import sys
from .core.aws.credentials import get_app_config
from .core.blocks.block import REGION_KEY
from .core.blocks.registry import get_block_registry
from .core.common.config import AWS_BLOCKS_LOG_LEVEL, DEFAULT_REGION
from .core.common.errors import AwsBlocksError
from .core.common.events import CollectingEmitter
from .core.common.helpers import as_json
from botocore.exceptions import ClientError, NoCredentialsError
from loguru import logger
from mcp.server import FastMCP
from typing import Any


logger.remove()
logger.add(sys.stderr, level=AWS_BLOCKS_LOG_LEVEL)

server = FastMCP(name='AWSBlocks', log_level=AWS_BLOCKS_LOG_LEVEL)


@server.tool(
    name='list_blocks',
    description="""List the AWS blocks available to run.

    Each block wraps exactly one AWS API operation. Use 'describe_block' to get the
    input schema of a block before running it with 'run_block'.

    Tool Args:
        app: Optional app name (e.g. "cloudfront", "sqs") to restrict the listing to

    Returns:
        The ids, names and descriptions of the matching blocks
    """,
)
def list_blocks(app: str | None = None) -> dict[str, Any]:
    """List the registered blocks."""
    registry = get_block_registry()
    blocks = registry.list_blocks(app)
    return {
        'blocks': [
            {
                'id': block.block_id,
                'name': block.name,
                'description': block.descriptor.description,
            }
            for block in blocks
        ]
    }


@server.tool(
    name='describe_block',
    description="""Describe a single AWS block: its service, operation, input schema and output shape.

    Every block accepts a 'region' field (required) and an optional 'assumeRoleArn'
    field, next to the fields of the operation itself.

    Tool Args:
        block_id: Id of the block, as returned by 'list_blocks' (e.g. "cloudfront.getInvalidation")
    """,
)
def describe_block(block_id: str) -> dict[str, Any]:
    """Describe one block."""
    try:
        return get_block_registry().get_block(block_id).describe()
    except AwsBlocksError as e:
        return {'error': True, 'detail': e.as_failure().reason}


@server.tool(
    name='run_block',
    description="""Run an AWS block once and return the event it emitted.

    Key points:
    - The input configuration MUST match the block's input schema (see 'describe_block')
    - Blocks run in the region set by the AWS_REGION environment variable by default, set 'region' to override it
    - Set 'assumeRoleArn' to run the operation with the credentials of another IAM role

    Tool Args:
        block_id: Id of the block to run (e.g. "cloudfront.getInvalidation")
        input_config: The input configuration of the block

    Returns:
        The response of the AWS operation or an error message
    """,
)
async def run_block(block_id: str, input_config: dict[str, Any]) -> dict[str, Any]:
    """Run a block and return its emitted payload."""
    try:
        block = get_block_registry().get_block(block_id)
    except AwsBlocksError as e:
        return {'error': True, 'detail': e.as_failure().reason}

    input_config = dict(input_config)
    if input_config.get(REGION_KEY) is None and DEFAULT_REGION:
        input_config[REGION_KEY] = DEFAULT_REGION

    try:
        app_config = get_app_config()
        emitter = CollectingEmitter()
        payload = await block.on_event(app_config, input_config, emitter)
        return {'block_id': block_id, 'response': json.loads(as_json(payload))}
    except NoCredentialsError:
        return {
            'error': True,
            'detail': 'Error while running the block: No AWS credentials found. '
            "Please configure your AWS credentials using 'aws configure' "
            'or set appropriate environment variables.',
        }
    except ClientError as e:
        error = e.response.get('Error', {})
        return {
            'error': True,
            'detail': f'Error while running the block: {str(e)}',
            'code': error.get('Code'),
            'status': e.response.get('ResponseMetadata', {}).get('HTTPStatusCode'),
        }
    except AwsBlocksError as e:
        return {
            'error': True,
            'detail': f'Error while running the block: {e.as_failure().reason}',
        }
    except Exception as e:
        logger.exception('Block {} failed', block_id)
        return {'error': True, 'detail': f'Error while running the block: {str(e)}'}


def main():
    """Main entry point for the AWS blocks MCP server."""
    if os.getenv('AWS_REGION') is None:
        sys.stderr.write('[AWSBlocks Error]: AWS_REGION environment variable is not defined.')
        raise ValueError('AWS_REGION environment variable is not defined.')

    registry = get_block_registry()
    logger.info('Serving {} blocks from apps: {}', len(registry.blocks), ', '.join(registry.apps()))
    logger.debug('Registered blocks:\n{}', registry.pretty_print_blocks())

    server.run(transport='stdio')

