"""Streaming I/O — upload from a file object, append, read ranges, walk a tree.

Point ``WEBHDFS_HOSTS`` (comma-separated) and ``WEBHDFS_USER`` at a running cluster.
"""

from __future__ import annotations

import io
import os

from webhdfs_client import Client

if __name__ == "__main__":
    hosts = os.environ.get("WEBHDFS_HOSTS", "http://localhost:9870").split(",")
    user = os.environ.get("WEBHDFS_USER", "hdfs")

    with Client(hosts, user) as client:
        base = client.resource(f"/tmp/{user}/streaming")
        base.mkdir(parents=True)

        # --- Upload from a stream: the body is sent without buffering it whole ---
        log = base.child("events.log")
        log.create(io.BytesIO(b"line1\nline2\n"), overwrite=True)
        log.append(io.BytesIO(b"line3\nline4\n"))
        print("Wrote file from BytesIO stream and appended to it.")

        # --- Read as a stream ---
        with log.open() as reader:
            for line in reader:
                print(f"  {line.rstrip()!r}")

        # --- Byte range ---
        print(f"\nBytes 6..11: {log.read_bytes(offset=6, length=5)!r}")

        # --- Recursive listing, pre-order ---
        base.child("nested/deeper").mkdir(parents=True)
        base.child("nested/deeper/leaf.bin").create(b"X" * 10_000, overwrite=True)
        print("\nTree:")
        for res in base.ls_resources(recursive=True):
            kind = "d" if res.is_dir() else "-"
            print(f"  {kind} {res.length:>6} {res.path}")

        base.remove(recursive=True)

    print("\nDone!")
