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

"""Validate block catalog files against the catalog schema."""

import argparse
import sys
from ..core.blocks.json_validator import validator
from ..core.blocks.registry import default_catalog_dir
from loguru import logger
from pathlib import Path


def main(paths: list[Path] | None = None) -> int:
    """Validate the given catalog files, or the whole catalog, and return an exit code."""
    files = paths or sorted(default_catalog_dir().glob('*.json'))
    if not files:
        logger.error('No catalog files found')
        return 1

    failures = 0
    for file_path in files:
        summary = validator.get_validation_summary(file_path)
        print(summary.rstrip())
        if not summary.startswith('OK'):
            failures += 1

    logger.info(f'Validated {len(files)} catalog files, {failures} failed')
    return 1 if failures else 0


if __name__ == '__main__':
    logger.remove()
    logger.add(sys.stderr)

    parser = argparse.ArgumentParser(description='Validate AWS block catalog files')
    parser.add_argument('paths', nargs='*', type=Path, help='Catalog files to validate')
    args = parser.parse_args()
    sys.exit(main(args.paths))
