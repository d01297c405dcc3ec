#!/usr/bin/env python3
"""
Check every stored account document.

Each account file is checked in two passes: the raw YAML against schema.yaml,
then the conversion to a MotorbikeState (timestamps, duplicate item ids).
"""
import sys
from pathlib import Path
from typing import Dict, List

import yaml
from jsonschema import Draft7Validator

from motocare import InvalidInputError, YamlStore, state_from_dict
from motocare.config import get_settings

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"


def load_schema() -> dict:
    with open(SCHEMA_PATH) as f:
        return yaml.safe_load(f)


def _describe(error) -> str:
    location = ".".join(str(p) for p in error.absolute_path) or "(document)"
    return f"Schema validation error at {location}: {error.message}"


def validate_account_file(path: Path, schema: dict) -> List[str]:
    """Problems found in one account document, empty when it is valid."""
    try:
        document = yaml.safe_load(path.read_text())
    except OSError as e:
        return [f"Error: {e}"]
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]

    validator = Draft7Validator(schema)
    problems = [_describe(e) for e in sorted(validator.iter_errors(document), key=str)]
    if problems:
        return problems

    try:
        state_from_dict(document)
    except InvalidInputError as e:
        return [f"Invalid account: {e}"]
    return []


def validate_store(store: YamlStore, schema: dict) -> Dict[str, List[str]]:
    """Problems per account id, for every account in the store."""
    return {
        account_id: validate_account_file(store.path_for(account_id), schema)
        for account_id in store.accounts()
    }


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    data_dir = Path(argv[0]) if argv else get_settings().data_dir
    if not data_dir.is_dir():
        print(f"Error: data directory not found: {data_dir}")
        return 1

    store = YamlStore(data_dir)
    results = validate_store(store, load_schema())
    if not results:
        print(f"Warning: No accounts found in {data_dir}")
        return 0

    failed = [account_id for account_id, problems in results.items() if problems]
    for account_id, problems in results.items():
        name = store.path_for(account_id).name
        if not problems:
            print(f"OK: {name}")
            continue
        print(f"FAIL: {name}")
        for problem in problems:
            print(f"  {problem}")

    print()
    print(f"{len(results) - len(failed)}/{len(results)} accounts valid")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
