#!/usr/bin/env python3
"""Basic usage example for Parsed File Manager.

This example demonstrates:
1. Creating an engine for a hosts file
2. Prefetching the file and binding entries to desired specs
3. Creating, updating and removing entries
4. Flushing: one write per changed file, one backup per load
5. Finding the backup in the file bucket

Run this example:
    python basic_usage.py
"""

import tempfile
from pathlib import Path

from parsed_file_manager import FileBucket, ResourceSpec, create_engine
from parsed_file_manager.accessors.flat import BUCKET_DIRNAME
from parsed_file_manager.utils import content_digest

SAMPLE_HOSTS = (
    "# static entries\n"
    "127.0.0.1\tlocalhost\n"
    "10.0.0.5\tdb\tdb.internal\t# primary database\n"
    "10.0.0.6\tcache\n"
)


def main():
    with tempfile.TemporaryDirectory() as temp_dir:
        hosts = Path(temp_dir) / "hosts"
        hosts.write_text(SAMPLE_HOSTS)

        print("=" * 60)
        print("Parsed File Manager - Basic Usage Example")
        print("=" * 60)

        # ---------------------------------------------------------------------
        # Step 1: Create the engine
        # ---------------------------------------------------------------------
        print("\n[1] Creating engine...")
        engine = create_engine(default_target=str(hosts))
        print(f"    Default target: {engine.default_target}")

        # ---------------------------------------------------------------------
        # Step 2: Prefetch and bind specs
        # ---------------------------------------------------------------------
        print("\n[2] Prefetching with desired specs...")
        specs = [
            ResourceSpec("db", {"ip": "10.0.0.50", "host_aliases": ["db.internal"]}),
            ResourceSpec("web", {"ip": "10.0.0.7", "host_aliases": ["www"]}),
            ResourceSpec("cache", {"ensure": "absent"}),
        ]
        handles = engine.prefetch(specs)
        for name, handle in handles.items():
            print(f"    {name:<8} exists={handle.exists()}")

        # ---------------------------------------------------------------------
        # Step 3: Converge
        # ---------------------------------------------------------------------
        print("\n[3] Applying changes in memory...")
        db = handles["db"]
        if db.get("ip") != "10.0.0.50":
            db.set("ip", "10.0.0.50")
            print("    db: ip updated")

        web = handles["web"]
        if not web.exists():
            print(f"    web: {web.create()}")

        cache = handles["cache"]
        if cache.exists():
            print(f"    cache: {cache.destroy()}")

        print(f"    Dirty targets: {engine.dirty.pending()}")

        # ---------------------------------------------------------------------
        # Step 4: Flush
        # ---------------------------------------------------------------------
        print("\n[4] Flushing...")
        db.flush()
        web.flush()
        cache.flush()

        print("    Resulting file:")
        for line in hosts.read_text().splitlines():
            print(f"      {line}")

        # ---------------------------------------------------------------------
        # Step 5: Backups
        # ---------------------------------------------------------------------
        print("\n[5] Checking the bucket...")
        bucket = FileBucket(hosts.parent / BUCKET_DIRNAME)
        digest = content_digest(SAMPLE_HOSTS)
        original = bucket.retrieve(digest)
        print(f"    Original content backed up as {digest}: {original == SAMPLE_HOSTS}")
        print(f"    Backed up from: {bucket.paths(digest)}")

        print("\n" + "=" * 60)
        print("Example complete!")
        print("=" * 60)


if __name__ == "__main__":
    main()
