import json
import os
from collections.abc import Callable, Iterator
from threading import RLock
from typing import Generic, TypeVar

from pydantic import BaseModel

from fintrack_ai.logger import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _record_id(record: BaseModel) -> int:
    return getattr(record, "id")


class JsonRepository(Generic[ModelT]):
    """
    Small id-keyed record store persisted as a JSON list.

    Without a ``data_path`` records only live in memory.
    """

    model: type[ModelT]

    def __init__(self, data_path: str | None = None):
        self.data_path = data_path
        self._records: dict[int, ModelT] = {}
        self._lock = RLock()
        self.load()

    def load(self) -> None:
        if not self.data_path or not os.path.exists(self.data_path):
            return
        try:
            with open(self.data_path, encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError:
            logger.warning("Corrupt data file %s, starting empty.", self.data_path)
            raw = []
        with self._lock:
            self._records = {}
            for item in raw:
                record = self.model.model_validate(item)
                self._records[_record_id(record)] = record

    def save(self) -> None:
        if not self.data_path:
            return
        with self._lock:
            payload = [record.model_dump(mode="json") for record in self._records.values()]
        with open(self.data_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

    def _next_id(self) -> int:
        return max(self._records, default=0) + 1

    def add(self, record: ModelT) -> ModelT:
        with self._lock:
            stored = record.model_copy(update={"id": self._next_id()})
            self._records[_record_id(stored)] = stored
            self.save()
        return stored

    def put(self, record: ModelT) -> ModelT:
        with self._lock:
            self._records[_record_id(record)] = record
            self.save()
        return record

    def get(self, record_id: int) -> ModelT | None:
        with self._lock:
            return self._records.get(record_id)

    def all(self) -> list[ModelT]:
        with self._lock:
            return list(self._records.values())

    def first(self, predicate: Callable[[ModelT], bool]) -> ModelT | None:
        return next(self.filter(predicate), None)

    def filter(self, predicate: Callable[[ModelT], bool]) -> Iterator[ModelT]:
        return (record for record in self.all() if predicate(record))

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
