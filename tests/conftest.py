"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.fakes import FakeWebHdfs
from webhdfs_client import Client

if TYPE_CHECKING:
    from collections.abc import Iterator

    from webhdfs_client import Resource

ACTIVE = "http://nn1:50070"
STANDBY = "http://nn2:50070"


@pytest.fixture()
def fake() -> FakeWebHdfs:
    return FakeWebHdfs()


@pytest.fixture()
def client(fake: FakeWebHdfs) -> Iterator[Client]:
    with Client([ACTIVE, STANDBY], "hdfs", timeout=5, executor=fake) as c:
        yield c


@pytest.fixture()
def root(client: Client) -> Resource:
    return client.resource("/")
