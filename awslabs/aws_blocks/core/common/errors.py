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

import dataclasses
from typing import Any


@dataclasses.dataclass(frozen=True)
class Failure:
    """A failure reason together with the context it happened in."""

    reason: str
    context: dict[str, Any] | None = None


class AwsBlocksError(Exception):
    """Base class for errors raised by the blocks layer itself.

    Errors coming from AWS (credentials, throttling, validation on the
    service side, ...) are never wrapped in this hierarchy, they surface
    as the original botocore exceptions.
    """

    def __init__(self, reason: str, context: dict[str, Any] | None = None):
        """Initialize the error with a reason and an optional context."""
        super().__init__(reason)
        self.reason = reason
        self.context = context

    def as_failure(self) -> Failure:
        """Return the error as a failure record."""
        return Failure(reason=self.reason, context=self.context)


class CatalogError(AwsBlocksError):
    """Raised when a block catalog cannot be loaded."""


class UnknownBlockError(AwsBlocksError):
    """Raised when a block id is not present in the registry."""

    def __init__(self, block_id: str):
        """Initialize the error for the given block id."""
        super().__init__(f"The block '{block_id}' does not exist.", {'block_id': block_id})
        self.block_id = block_id


class InvalidInputError(AwsBlocksError):
    """Raised when an input configuration does not match the block's input schema."""

    def __init__(self, block_id: str, errors: list[str]):
        """Initialize the error with every schema violation found."""
        super().__init__(
            f"Invalid input for block '{block_id}': {'; '.join(errors)}",
            {'block_id': block_id, 'errors': errors},
        )
        self.block_id = block_id
        self.errors = errors
