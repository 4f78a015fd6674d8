"""AWS-specific functionality for AWS blocks."""

from .clients import create_client
from .credentials import get_app_config, get_local_credentials, resolve_credentials
from .dispatcher import dispatch, send_command

__all__ = [
    'create_client',
    'get_app_config',
    'get_local_credentials',
    'resolve_credentials',
    'dispatch',
    'send_command',
]
