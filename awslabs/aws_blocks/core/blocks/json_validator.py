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

"""JSON validation for block catalogs and block input configurations."""

import json
import jsonschema
from loguru import logger
from pathlib import Path
from typing import Any


SCHEMA_FILE = Path(__file__).parent / 'schema.json'


def format_errors(validator: jsonschema.Draft202012Validator, instance: Any) -> list[str]:
    """Validate an instance and return one readable message per error, ordered by location."""
    messages = []
    for error in sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path]):
        location = ' -> '.join(str(p) for p in error.path)
        text = f'{location}: {error.message}' if location else error.message
        if error.context:
            # oneOf/anyOf failures: the first branch usually explains the problem
            text = f'{text} ({error.context[0].message})'
        messages.append(text)
    return messages


class CatalogJSONValidator:
    """Validates block catalog files against the catalog schema."""

    def __init__(self, schema_path: Path = SCHEMA_FILE):
        """Load the catalog schema and compile a validator for it."""
        self.schema_path = schema_path
        self.schema = self._load_schema()
        self._validator = jsonschema.Draft202012Validator(self.schema)

    def get_validation_summary(self, file_path: Path) -> str:
        """Return a printable report for one catalog file."""
        is_valid, errors = self.validate_file(file_path)
        if is_valid:
            return f'OK {file_path.name} is valid'

        lines = [f'FAILED {file_path.name} has validation errors:']
        lines.extend(f'  {number}. {error}' for number, error in enumerate(errors, 1))
        return '\n'.join(lines) + '\n'

    def validate_data(self, data: Any) -> tuple[bool, list[str]]:
        """Validate already parsed catalog data.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = format_errors(self._validator, data)
        return not errors, errors

    def validate_json(self, json_content: str) -> tuple[bool, list[str]]:
        """Parse and validate a catalog held in a string."""
        try:
            data = json.loads(json_content)
        except json.JSONDecodeError as e:
            return False, [f'Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})']
        return self.validate_data(data)

    def validate_file(self, file_path: Path) -> tuple[bool, list[str]]:
        """Read and validate a catalog file."""
        try:
            content = Path(file_path).read_text()
        except FileNotFoundError:
            return False, [f'File not found: {file_path}']
        except OSError as e:
            return False, [f'Cannot read {file_path}: {e}']
        return self.validate_json(content)

    def _load_schema(self) -> dict[str, Any]:
        try:
            return json.loads(self.schema_path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f'Failed to load catalog schema {self.schema_path}: {e}')
            raise


validator = CatalogJSONValidator()
