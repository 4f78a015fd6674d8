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

import boto3
import time
from ..common.config import ENDPOINT_URL, ROLE_SESSION_PREFIX
from ..common.models import AppConfig, Credentials
from .clients import create_client
from botocore.exceptions import NoCredentialsError
from loguru import logger


def generate_session_name(prefix: str = ROLE_SESSION_PREFIX) -> str:
    """Return a role session name unique to the current millisecond."""
    return f'{prefix}-{int(time.time() * 1000)}'


def resolve_credentials(
    region: str,
    base_credentials: Credentials,
    role_arn: str | None = None,
    endpoint: str | None = None,
) -> Credentials:
    """Resolve the credentials to use for a single downstream call.

    Without a role the base credentials are returned unchanged. With a role,
    the base credentials are exchanged for temporary ones through STS in the
    given region. Any STS failure propagates to the caller.
    """
    if not role_arn:
        return base_credentials

    logger.info('Assuming role {} in {}', role_arn, region)
    sts_client = create_client('sts', region, base_credentials, endpoint)
    response = sts_client.assume_role(
        RoleArn=role_arn,
        RoleSessionName=generate_session_name(),
    )

    temporary_credentials = response['Credentials']
    return Credentials(
        access_key_id=temporary_credentials['AccessKeyId'],
        secret_access_key=temporary_credentials['SecretAccessKey'],
        session_token=temporary_credentials['SessionToken'],
    )


def get_local_credentials(profile_name: str | None = None) -> Credentials:
    """Get the credentials found by the default boto3 credential chain."""
    session = boto3.Session(profile_name=profile_name)
    aws_creds = session.get_credentials()

    if aws_creds is None:
        raise NoCredentialsError()

    frozen_creds = aws_creds.get_frozen_credentials()
    return Credentials(
        access_key_id=frozen_creds.access_key,
        secret_access_key=frozen_creds.secret_key,
        session_token=frozen_creds.token,
    )


def get_app_config(endpoint: str | None = ENDPOINT_URL) -> AppConfig:
    """Build the platform configuration from the local environment."""
    credentials = get_local_credentials()
    return AppConfig(
        access_key_id=credentials.access_key_id,
        secret_access_key=credentials.secret_access_key,
        session_token=credentials.session_token,
        endpoint=endpoint,
    )
