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
from ... import __version__
from ..common.models import Credentials
from botocore.client import BaseClient
from botocore.config import Config
from loguru import logger


USER_AGENT_EXTRA = f'awslabs/aws-blocks/{__version__}'


def create_client(
    service_name: str,
    region: str,
    credentials: Credentials,
    endpoint: str | None = None,
) -> BaseClient:
    """Create a client for a service, scoped to a region and a set of credentials.

    A new session is created on every call so that concurrent invocations
    never share credentials or client state.
    """
    logger.debug('Creating {} client in {}', service_name, region)
    session = boto3.session.Session()
    return session.client(
        service_name,
        region_name=region,
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key,
        aws_session_token=credentials.session_token,
        endpoint_url=endpoint,
        config=Config(user_agent_extra=USER_AGENT_EXTRA),
    )
