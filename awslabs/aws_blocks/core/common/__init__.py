"""Common utilities and helpers for AWS blocks."""

from .errors import (
    AwsBlocksError,
    CatalogError,
    Failure,
    InvalidInputError,
    UnknownBlockError,
)
from .helpers import as_json, serialize_response
from loguru import logger
from .models import (
    AppConfig,
    Credentials,
    InvocationContext,
    OperationDescriptor,
)

__all__ = [
    'AwsBlocksError',
    'CatalogError',
    'Failure',
    'InvalidInputError',
    'UnknownBlockError',
    'as_json',
    'serialize_response',
    'logger',
    'AppConfig',
    'Credentials',
    'InvocationContext',
    'OperationDescriptor',
]
