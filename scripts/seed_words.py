#!/usr/bin/env python3
"""Seed the built-in sight word bank into the configured storage."""

import argparse
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.wordbank import SIGHT_WORDS, get_seed_data


def get_storage(storage_type: str):
    if storage_type == 'file':
        from server.file_storage import FileStorage
        return FileStorage()
    from server.postgres_storage import PostgresStorage
    return PostgresStorage()


def main():
    parser = argparse.ArgumentParser(description='Seed sight word rounds')
    parser.add_argument(
        '--storage',
        default=os.environ.get('SIGHTWORDS_STORAGE', 'postgres'),
        choices=['postgres', 'file'],
        help='Storage backend (default: $SIGHTWORDS_STORAGE or postgres)'
    )
    parser.add_argument('--sport', choices=list(SIGHT_WORDS), help='Only seed one sport')
    args = parser.parse_args()

    storage = get_storage(args.storage)
    rounds = get_seed_data(args.sport)
    storage.seed_rounds(rounds)
    for sport in SIGHT_WORDS:
        if args.sport is None or sport == args.sport:
            print(f"{sport}: {storage.count_rounds(sport)} rounds")
    return 0


if __name__ == '__main__':
    sys.exit(main())
