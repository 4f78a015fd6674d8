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

import copy
import jsonschema
from ..aws.dispatcher import dispatch
from ..common.config import STRICT_INPUTS
from ..common.errors import InvalidInputError
from ..common.events import EventEmitter
from ..common.models import AppConfig, InvocationContext, OperationDescriptor
from .json_validator import format_errors
from functools import cached_property
from loguru import logger
from typing import Any


REGION_KEY = 'region'
ASSUME_ROLE_ARN_KEY = 'assumeRoleArn'
ROUTING_FIELDS = (REGION_KEY, ASSUME_ROLE_ARN_KEY)

REGION_FIELD_SCHEMA = {
    'type': 'string',
    'minLength': 1,
    'description': 'AWS region for this operation',
}
ASSUME_ROLE_ARN_FIELD_SCHEMA = {
    'type': 'string',
    'description': (
        'Optional IAM role ARN to assume before executing this operation. If provided, '
        'the block will use STS to assume this role and use the temporary credentials.'
    ),
}


class Block:
    """A single AWS operation exposed as a callable unit of the host."""

    def __init__(self, block_id: str, descriptor: OperationDescriptor, strict: bool = STRICT_INPUTS):
        """Initialize the block.

        Args:
            block_id: Identifier of the block in the registry, e.g. cloudfront.getInvalidation
            descriptor: What the block runs and the shape of its inputs and outputs
            strict: Reject input fields the block does not declare
        """
        self.block_id = block_id
        self.descriptor = descriptor
        self.strict = strict

    def __repr__(self) -> str:
        """Return a short representation of the block."""
        return f'Block({self.block_id!r}, {self.descriptor.service}.{self.descriptor.operation})'

    @property
    def name(self) -> str:
        """Return the display name of the block."""
        return self.descriptor.name

    @cached_property
    def input_schema(self) -> dict[str, Any]:
        """Return the JSON schema an input configuration has to satisfy."""
        properties = {
            REGION_KEY: dict(REGION_FIELD_SCHEMA),
            ASSUME_ROLE_ARN_KEY: dict(ASSUME_ROLE_ARN_FIELD_SCHEMA),
        }
        for key, field in self.descriptor.inputs.items():
            properties[key] = field.as_json_schema()

        return {
            'type': 'object',
            'properties': properties,
            'required': [REGION_KEY, *self.descriptor.required_inputs],
            'additionalProperties': not self.strict,
        }

    @cached_property
    def _validator(self) -> jsonschema.Draft202012Validator:
        return jsonschema.Draft202012Validator(self.input_schema)

    def prepare_input(
        self, input_config: dict[str, Any], endpoint: str | None = None
    ) -> InvocationContext:
        """Validate an input configuration and turn it into an invocation context.

        Fields set to None are treated as absent, at any depth. Routing fields (region and
        role ARN) are split from the parameters sent to the operation.
        """
        config = _drop_none(input_config)

        errors = format_errors(self._validator, config)
        if errors:
            raise InvalidInputError(self.block_id, errors)

        parameters = _coerce(
            {key: value for key, value in config.items() if key not in ROUTING_FIELDS},
            self.input_schema,
        )
        return InvocationContext(
            region=config[REGION_KEY],
            parameters=parameters,
            assume_role_arn=config.get(ASSUME_ROLE_ARN_KEY),
            endpoint=endpoint,
        )

    async def on_event(
        self,
        app_config: AppConfig,
        input_config: dict[str, Any],
        emitter: EventEmitter,
    ) -> dict[str, Any]:
        """Run the block for one incoming event and emit its result.

        Returns the emitted payload. Input validation errors raise
        InvalidInputError, errors from AWS propagate unchanged.
        """
        context = self.prepare_input(input_config, endpoint=app_config.endpoint)
        logger.info('Running block {} in {}', self.block_id, context.region)
        return await dispatch(self.descriptor, context, app_config.credentials, emitter)

    def describe(self) -> dict[str, Any]:
        """Return the block metadata in a JSON-ready form."""
        return {
            'id': self.block_id,
            'name': self.descriptor.name,
            'description': self.descriptor.description,
            'service': self.descriptor.service,
            'operation': self.descriptor.operation,
            'inputs': copy.deepcopy(self.input_schema),
            'output': self.descriptor.output.model_dump(by_alias=True),
        }


def _drop_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _drop_none(member) for key, member in value.items() if member is not None}
    if isinstance(value, list):
        return [_drop_none(member) for member in value]
    return value


def _coerce(value: Any, schema: dict[str, Any]) -> Any:
    """Turn integral floats into ints wherever the schema declares a number.

    JSON hosts send every number as float; botocore rejects floats for integer shapes.
    """
    if isinstance(value, float) and value.is_integer() and schema.get('type') == 'number':
        return int(value)
    if isinstance(value, list):
        items = schema.get('items')
        return [_coerce(member, items if isinstance(items, dict) else {}) for member in value]
    if isinstance(value, dict):
        properties = schema.get('properties', {})
        extra = schema.get('additionalProperties')
        extra = extra if isinstance(extra, dict) else {}
        return {key: _coerce(member, properties.get(key, extra)) for key, member in value.items()}
    return value
