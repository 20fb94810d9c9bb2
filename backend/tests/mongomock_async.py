"""
Base mongomock exposée avec l'API async de motor (await sur les opérations,
find/aggregate synchrones retournant un curseur avec to_list).
"""

import mongomock


class AsyncMockCursor:
    def __init__(self, cursor):
        self._cursor = cursor

    def sort(self, *args, **kwargs):
        self._cursor = self._cursor.sort(*args, **kwargs)
        return self

    def skip(self, count: int):
        self._cursor = self._cursor.skip(count)
        return self

    def limit(self, count: int):
        self._cursor = self._cursor.limit(count)
        return self

    async def to_list(self, length=None):
        docs = list(self._cursor)
        return docs[:length] if length else docs

    def __aiter__(self):
        return self

    async def __anext__(self):
        try:
            return next(self._cursor)
        except StopIteration:
            raise StopAsyncIteration


class AsyncMockCollection:
    def __init__(self, collection):
        self._collection = collection

    def find(self, *args, **kwargs) -> AsyncMockCursor:
        return AsyncMockCursor(self._collection.find(*args, **kwargs))

    def aggregate(self, pipeline, **kwargs) -> AsyncMockCursor:
        return AsyncMockCursor(self._collection.aggregate(pipeline, **kwargs))

    def __getattr__(self, name):
        method = getattr(self._collection, name)

        async def call(*args, **kwargs):
            return method(*args, **kwargs)

        return call


class AsyncMockDatabase:
    def __init__(self, name: str = "prospection_test"):
        self._database = mongomock.MongoClient()[name]

    def __getitem__(self, name: str) -> AsyncMockCollection:
        return AsyncMockCollection(self._database[name])

    def __getattr__(self, name: str) -> AsyncMockCollection:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]
