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

import asyncio
from ..common.events import EventEmitter
from ..common.helpers import operation_timer, serialize_response
from ..common.models import Credentials, InvocationContext, OperationDescriptor
from .clients import create_client
from .credentials import resolve_credentials
from botocore.client import BaseClient
from typing import Any


def send_command(
    descriptor: OperationDescriptor,
    client: BaseClient,
    parameters: dict[str, Any],
) -> dict[str, Any] | None:
    """Run the descriptor's operation exactly once on the given client."""
    operation = getattr(client, descriptor.python_operation_name)
    with operation_timer(descriptor.service, descriptor.operation):
        return operation(**parameters)


def _call_operation(
    descriptor: OperationDescriptor,
    context: InvocationContext,
    credentials: Credentials,
) -> dict[str, Any] | None:
    client = create_client(descriptor.service, context.region, credentials, context.endpoint)
    return send_command(descriptor, client, context.parameters)


async def dispatch(
    descriptor: OperationDescriptor,
    context: InvocationContext,
    base_credentials: Credentials,
    emitter: EventEmitter,
) -> dict[str, Any]:
    """Resolve credentials, call the operation and emit its response.

    The role assumption (if any) and the operation call are awaited one after
    the other. Errors from either call propagate and nothing is emitted.
    Returns the emitted payload.
    """
    credentials = await asyncio.to_thread(
        resolve_credentials,
        context.region,
        base_credentials,
        context.assume_role_arn,
        context.endpoint,
    )
    response = await asyncio.to_thread(_call_operation, descriptor, context, credentials)

    if descriptor.serialize_response:
        response = serialize_response(response)

    payload = response or {}
    await emitter.emit(payload)
    return payload
