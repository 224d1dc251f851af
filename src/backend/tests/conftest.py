"""Shared fixtures: an in-memory stand-in for AsyncSession."""

from uuid import uuid4

import pytest


class FakeResult:
    def __init__(self, rows):
        self._rows = list(rows)

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)


class FakeSession:
    """Returns queued rows for each ``execute`` call in order and records writes.

    ``flush`` assigns primary keys the way the database default would.
    """

    def __init__(self, *results):
        self.results = list(results)
        self.statements = []
        self.added = []
        self.flushes = 0
        self.commits = 0

    async def execute(self, statement):
        self.statements.append(statement)
        return FakeResult(self.results.pop(0) if self.results else [])

    def add(self, obj):
        self.added.append(obj)

    async def flush(self):
        self.flushes += 1
        for obj in self.added:
            if getattr(obj, "id", None) is None:
                obj.id = uuid4()

    async def commit(self):
        self.commits += 1

    async def refresh(self, obj):
        return None

    def added_of(self, cls):
        return [obj for obj in self.added if isinstance(obj, cls)]


@pytest.fixture
def make_session():
    return FakeSession
