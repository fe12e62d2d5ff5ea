#!/usr/bin/env python3
"""Positional matching example for Parsed File Manager.

This example demonstrates:
1. Supplying a matcher that binds entries by address
2. Renaming an on-disk entry to the name its spec asks for
3. Specs that put entries in a non-default target
4. Working fully in memory with RAM targets

Run this example:
    python positional_matching.py
"""

from parsed_file_manager import (
    EngineConfig,
    FileType,
    HostsParser,
    HOSTS_SCHEMA,
    ParsedFileEngine,
    RamFileSystem,
    ResourceSpec,
    first_match,
)


def same_address(record, spec):
    return record.get("ip") == spec["ip"]


def main():
    fs = RamFileSystem()
    fs.files["/etc/hosts"] = "10.0.0.5\told-db\n10.0.0.6\tcache\n"

    config = EngineConfig(default_target="/etc/hosts", filetype=FileType.RAM)
    engine = ParsedFileEngine(
        config,
        HostsParser(),
        HOSTS_SCHEMA,
        matcher=first_match(same_address),
        filesystem=fs,
    )

    print("=" * 60)
    print("Parsed File Manager - Positional Matching Example")
    print("=" * 60)

    handles = engine.prefetch([
        ResourceSpec("db", {"ip": "10.0.0.5"}),
        ResourceSpec("metrics", {"ip": "10.0.1.9", "target": "/etc/hosts.d/metrics"}),
    ])

    db = handles["db"]
    print(f"\n[1] db bound to existing entry: {db.exists()} (ip {db.get('ip')})")
    engine.mark_modified(db.get("target"))
    db.flush()

    metrics = handles["metrics"]
    print(f"[2] metrics exists: {metrics.exists()}")
    metrics.create()
    metrics.flush()

    print("\n[3] Targets after flush:")
    for target, text in sorted(fs.files.items()):
        print(f"    {target}")
        for line in text.splitlines():
            print(f"      {line}")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
