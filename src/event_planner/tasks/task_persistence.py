# src/event_planner/tasks/task_persistence.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config import DEFAULT_TASKS_STORAGE_KEY
from ..core.ports import KeyValueStore
from .task_codec import TaskDecodeError, decode_tasks, encode_tasks
from .task_models import TaskRecord

logger = logging.getLogger(__name__)


class TaskPersistence:
    """
    Reads and writes the whole task collection under one fixed key.

    Failure policy:
    - load: missing key or undecodable payload -> empty list (never raises)
    - save: encode/write errors are logged and reported via the return value;
      the previously stored payload is left as it was
    """

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_TASKS_STORAGE_KEY) -> None:
        self._kv = kv
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[TaskRecord]:
        try:
            payload = self._kv.get(self._key)
        except Exception:
            logger.exception("Failed to read stored tasks key=%s", self._key)
            return []

        if payload is None:
            logger.debug("No stored tasks under key=%s", self._key)
            return []

        try:
            tasks = decode_tasks(payload)
        except TaskDecodeError as e:
            logger.warning("Failed to decode saved tasks key=%s: %s", self._key, e)
            return []

        logger.debug("Loaded %d tasks key=%s", len(tasks), self._key)
        return tasks

    def save(self, tasks: Sequence[TaskRecord]) -> bool:
        try:
            payload = encode_tasks(tasks)
        except Exception:
            logger.exception("Failed to encode tasks for saving.")
            return False

        try:
            self._kv.set(self._key, payload)
        except Exception:
            logger.exception("Failed to write tasks key=%s", self._key)
            return False

        logger.debug("Saved %d tasks key=%s", len(tasks), self._key)
        return True
