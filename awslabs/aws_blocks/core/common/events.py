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

from typing import Any, Protocol


class EventEmitter(Protocol):
    """Receives the events blocks publish back to their host."""

    async def emit(self, payload: dict[str, Any]) -> None:
        """Publish a single event."""
        ...


class CollectingEmitter:
    """Emitter that keeps every emitted payload in memory."""

    def __init__(self):
        """Initialize an empty emitter."""
        self.events: list[dict[str, Any]] = []

    async def emit(self, payload: dict[str, Any]) -> None:
        """Store the payload."""
        self.events.append(payload)

    @property
    def last_event(self) -> dict[str, Any] | None:
        """Return the most recently emitted payload, if any."""
        return self.events[-1] if self.events else None
