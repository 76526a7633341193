import json
import logging
import os
import tempfile
import threading
import time
from typing import List

from ..schemas import Task


logger = logging.getLogger(__name__)


class JsonFileTodoStore:
    """To-do list persisted as a JSON array in a single file.

    Every append reads the whole array, adds one task and rewrites the file.
    The read-modify-write cycle runs under a lock and the rewrite goes through
    a temporary file that replaces the original, so concurrent appends in one
    process are serialized and a failed write leaves the old array intact.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._lock = threading.Lock()
        self._last_id = 0

    def _read(self) -> List[Task]:
        if not os.path.exists(self.file_path):
            return []
        with open(self.file_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise ValueError(f"{self.file_path} does not contain a JSON array")
        return [Task.model_validate(item) for item in raw]

    def _write(self, tasks: List[Task]) -> None:
        directory = os.path.dirname(os.path.abspath(self.file_path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".todos-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([task.model_dump() for task in tasks], f, indent=2)
            os.replace(tmp_path, self.file_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _next_id(self, tasks: List[Task]) -> int:
        # Millisecond timestamp, bumped past anything already issued or stored
        floor = max([self._last_id] + [task.id for task in tasks])
        return max(int(time.time() * 1000), floor + 1)

    def list_all(self) -> List[Task]:
        return self._read()

    def append(self, text: str) -> Task:
        with self._lock:
            tasks = self._read()
            task = Task(id=self._next_id(tasks), text=text)
            self._write(tasks + [task])
            self._last_id = task.id
        logger.debug(f"Appended task {task.id} to {self.file_path}")
        return task
