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

import os


TRUTHY_VALUES = frozenset(['true', 'yes', '1'])
STRICT_INPUTS_KEY = 'AWS_BLOCKS_STRICT_INPUTS'


def get_env_bool(env_key: str, default: bool) -> bool:
    """Get a boolean value from an environment variable, with a default."""
    return os.getenv(env_key, str(default)).casefold() in TRUTHY_VALUES


AWS_BLOCKS_LOG_LEVEL = os.getenv('AWS_BLOCKS_LOG_LEVEL', 'WARNING')
DEFAULT_REGION = os.getenv('AWS_REGION')
ENDPOINT_URL = os.getenv('AWS_ENDPOINT_URL')
ROLE_SESSION_PREFIX = os.getenv('AWS_BLOCKS_ROLE_SESSION_PREFIX', 'flows-session')
STRICT_INPUTS = get_env_bool(STRICT_INPUTS_KEY, True)
CATALOG_DIR = os.getenv('AWS_BLOCKS_CATALOG_DIR')
