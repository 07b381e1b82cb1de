"""Quickstart — connect to an active/standby pair, write and read a file.

Demonstrates:
- Building a ClientConfig from a plain dict
- Creating, reading and inspecting a file through a Resource handle

Point ``WEBHDFS_HOSTS`` (comma-separated) and ``WEBHDFS_USER`` at a running cluster.
"""

from __future__ import annotations

import logging
import os

from webhdfs_client import Client, ClientConfig

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    config = ClientConfig.from_dict(
        {
            "hosts": os.environ.get("WEBHDFS_HOSTS", "http://localhost:9870"),
            "user": os.environ.get("WEBHDFS_USER", "hdfs"),
        }
    )

    with Client.from_config(config) as client:
        home = client.resource(f"/tmp/{config.user}/quickstart")
        home.mkdir(parents=True)

        # Write a file
        hello = home.child("hello.txt")
        hello.create(b"Hello, world!", overwrite=True)
        print(f"File exists: {hello.exists()}")

        # Read it back
        print(f"Content: {hello.read_bytes()!r}")

        # Check metadata on a fresh handle (handles cache their first status)
        info = client.resource(hello.path)
        print(f"Size: {info.length} bytes, owner: {info.owner}, replication: {info.replication}")
        print(f"Modified: {info.status.modified_at}")

        home.remove(recursive=True)

    print("Done!")
