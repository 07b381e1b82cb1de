"""Error handling — NotFound, AlreadyExists, StandbyError, NoActiveHost.

Demonstrates the typed error hierarchy, the ``kind`` tag and how to retry a
call that hit a standby namenode.
"""

from __future__ import annotations

import os
import time

from webhdfs_client import (
    AlreadyExists,
    Client,
    ErrorKind,
    NoActiveHost,
    NotFound,
    StandbyError,
    WebHdfsError,
)

if __name__ == "__main__":
    hosts = os.environ.get("WEBHDFS_HOSTS", "http://localhost:9870").split(",")
    user = os.environ.get("WEBHDFS_USER", "hdfs")

    with Client(hosts, user) as client:
        # --- NotFound ---
        try:
            client.resource("/nonexistent.txt").read_bytes()
        except NotFound as exc:
            print(f"NotFound: {exc}")
            print(f"  path={exc.path}, host={exc.host}")

        # --- exists() turns NotFound into False ---
        print(f"\nexists(): {client.resource('/nonexistent.txt').exists()}")

        # --- AlreadyExists ---
        target = client.resource(f"/tmp/{user}/existing.txt")
        target.create(b"data", overwrite=True)
        try:
            target.create(b"new data")
        except AlreadyExists as exc:
            print(f"\nAlreadyExists: {exc}")

        # --- Standby: not retried automatically, reissue after a pause ---
        for attempt in range(3):
            try:
                print(f"\nLength: {client.resource(target.path).length}")
                break
            except StandbyError:
                print(f"Standby answered, retrying ({attempt + 1}/3)")
                time.sleep(1)

        # --- Dispatch on the error kind ---
        try:
            client.resource("/").child("missing/dir").remove()
            client.resource("/missing/file").open()
        except WebHdfsError as exc:
            if exc.kind is ErrorKind.NOT_FOUND:
                print(f"\nKind {exc.kind.value}: {type(exc).__name__}")

        target.remove()

    # --- Every host unreachable ---
    with Client(["http://127.0.0.1:1", "http://127.0.0.1:2"], user, timeout=1) as dead:
        try:
            dead.resource("/").exists()
        except NoActiveHost as exc:
            print(f"\nNoActiveHost: {exc} (last error: {exc.last_error})")

    print("\nDone!")
