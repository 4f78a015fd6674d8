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

import base64
import io
import json
import time
from botocore.response import StreamingBody
from contextlib import contextmanager
from datetime import date, datetime
from loguru import logger
from typing import Any


@contextmanager
def operation_timer(service: str, operation: str):
    """Context manager for timing operation calls.

    :param service: The service name.
    :param operation: The operation name.
    """
    start = time.perf_counter()
    logger.info('Starting operation {}.{}', service, operation)
    yield
    end = time.perf_counter()
    elapsed_time = end - start
    logger.info('Operation {}.{} completed in {} seconds', service, operation, elapsed_time)


def _encode_bytes(value: bytes | bytearray) -> str:
    # Blob members are always base64, like the AWS CLI prints them
    return base64.b64encode(value).decode('ascii')


class Boto3Encoder(json.JSONEncoder):
    """Custom JSON encoder for boto3 objects."""

    def default(self, o):
        """Return a JSON-serializable version of the object."""
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, StreamingBody):
            return o.read().decode('utf-8')
        if isinstance(o, (bytes, bytearray)):
            return _encode_bytes(o)
        if isinstance(o, (set, frozenset, tuple)):
            return list(o)

        return super().default(o)


def as_json(boto_response: dict[str, Any]) -> str:
    """Convert a boto3 response dictionary to a JSON string."""
    return json.dumps(boto_response, cls=Boto3Encoder)


# Marker for members that cannot be emitted and are left out
_DROP = object()


def serialize_response(response: Any) -> Any:
    """Return a copy of a boto3 response that is safe to emit.

    Streams are dropped, as are containers that reference one of their own
    ancestors. Containers shared between siblings are copied each time they
    appear. Dates and datetimes become ISO-8601 strings and bytes become
    base64 text.

    A response that is itself not serializable yields None.
    """
    result = _sanitize(response, frozenset())
    return None if result is _DROP else result


def _sanitize(value: Any, ancestors: frozenset[int]) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (StreamingBody, io.IOBase)):
        logger.debug('Dropping stream of type {} from response', type(value).__name__)
        return _DROP
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return _encode_bytes(value)

    if isinstance(value, (dict, list, tuple, set, frozenset)):
        if id(value) in ancestors:
            logger.debug('Dropping circular reference from response')
            return _DROP
        path = ancestors | {id(value)}

        if isinstance(value, dict):
            sanitized_dict = {}
            for key, member in value.items():
                sanitized = _sanitize(member, path)
                if sanitized is not _DROP:
                    sanitized_dict[str(key)] = sanitized
            return sanitized_dict

        sanitized_list = []
        for member in value:
            sanitized = _sanitize(member, path)
            if sanitized is not _DROP:
                sanitized_list.append(sanitized)
        return sanitized_list

    logger.warning('Dropping non-serializable member of type {}', type(value).__name__)
    return _DROP
