#!/usr/bin/env python
"""Seed the development document with fixture spaces and articles.

Constraints:
- Refuses to run when DOCSPACE_ENV=prod
- Idempotent: existing spaces (by name) and articles (by title) are skipped
- Never runs automatically (manual invocation only)

Usage:
    cd python && DOCSPACE_DATA_PATH=../data/db.json python ../scripts/seed_dev.py
"""

import sys


def main():
    from docspace.config import Environment, get_settings

    # 1. Environment check (hard fail in prod)
    settings = get_settings()
    if settings.docspace_env == Environment.PROD:
        print("ERROR: seed_dev.py refuses to run in DOCSPACE_ENV=prod")
        sys.exit(1)

    # 2. Fixture data (single source of truth)
    from docspace.store.client import JsonFileDocumentStore
    from tests.fixtures import seed_store

    store = JsonFileDocumentStore(settings.data_path)
    created = seed_store(store)

    # 3. Report
    print(f"Document: {settings.data_path}")
    print(f"DOCSPACE_ENV: {settings.docspace_env.value}")
    print()
    print(f"✓ Created {created['spaces']} space(s), {created['articles']} article(s)")


if __name__ == "__main__":
    main()
