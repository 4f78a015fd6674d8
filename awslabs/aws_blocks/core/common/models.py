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
import dataclasses
from botocore import xform_name
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any


PRIMITIVE_FIELD_TYPES = frozenset(['string', 'number', 'boolean'])


class Credentials(BaseModel):
    """Credentials model.

    See structure in https://sdk.amazonaws.com/java/api/latest/software/amazon/awssdk/auth/credentials/AwsSessionCredentials.html
    """

    access_key_id: str
    secret_access_key: str
    session_token: str | None = None


class AppConfig(BaseModel):
    """Platform-level configuration shared by every block invocation."""

    access_key_id: str
    secret_access_key: str
    session_token: str | None = None

    endpoint: str | None = None
    """Custom endpoint used for every client, STS included"""

    @property
    def credentials(self) -> Credentials:
        """Return the base credentials of the app."""
        return Credentials(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
            session_token=self.session_token,
        )


class InputField(BaseModel):
    """A single field of a block's input configuration."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    type: str | dict[str, Any]
    """Either a primitive type name or a nested JSON schema"""

    required: bool = False

    @field_validator('type')
    @classmethod
    def check_type(cls, value: str | dict[str, Any]) -> str | dict[str, Any]:
        """Only primitive type names or JSON schemas with a type are accepted."""
        if isinstance(value, str) and value not in PRIMITIVE_FIELD_TYPES:
            raise ValueError(f'Unsupported field type: {value}')
        if isinstance(value, dict) and 'type' not in value:
            raise ValueError('Nested field schemas need a type')
        return value

    def as_json_schema(self) -> dict[str, Any]:
        """Return the JSON schema for this field."""
        if isinstance(self.type, dict):
            schema = copy.deepcopy(self.type)
        else:
            schema = {'type': self.type}
        schema.setdefault('description', self.description)
        return schema


class BlockOutput(BaseModel):
    """The event a block emits."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    output_schema: dict[str, Any] = Field(
        default_factory=lambda: {'type': 'object', 'additionalProperties': True},
        alias='schema',
    )


class OperationDescriptor(BaseModel):
    """Static metadata of a block: which operation it runs and its input/output shapes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str

    service: str
    """The boto3 service name used to create the client"""

    operation: str
    """The API operation name, e.g. GetInvalidation"""

    inputs: dict[str, InputField] = Field(default_factory=dict)
    output: BlockOutput

    serialize_response: bool = Field(default=False, alias='serializeResponse')
    """Whether the response may hold streams or cycles and must be sanitized before emission"""

    @property
    def python_operation_name(self) -> str:
        """Return the boto3 method name for the operation."""
        return xform_name(self.operation)

    @property
    def required_inputs(self) -> list[str]:
        """Return the names of the required operation fields."""
        return [key for key, field in self.inputs.items() if field.required]


@dataclasses.dataclass(frozen=True)
class InvocationContext:
    """Everything a single block invocation needs, routing fields already split out."""

    region: str
    parameters: dict[str, Any]
    assume_role_arn: str | None = None
    endpoint: str | None = None
