from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Worker


class WorkerDirectory(Protocol):
    """Worker roster lookup owned by an external collaborator.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Worker]:
        raise NotImplementedError


class InMemoryWorkerDirectory(WorkerDirectory):
    def __init__(self, workers: Iterable[Worker] = ()):
        self._workers: dict[str, Worker] = {w.worker_id: w for w in workers}

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        return self._workers.get(worker_id)

    def list_active(self) -> Sequence[Worker]:
        return [w for w in self._workers.values() if w.is_active]

    def upsert(self, worker: Worker) -> None:
        self._workers[worker.worker_id] = worker
