from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional, Sequence
import logging
import threading

from .client import RequestDispatcher
from .exceptions import RunnerBusyError
from .models import DispatchResult, JobLog, JobStatus, RunStats


@dataclass
class RunnerConfig:
    delay_ms: int = 5000
    min_delay_ms: int = 50

    logger: Optional[logging.Logger] = None
    on_result: Optional[Callable[[JobLog], None]] = None

    @property
    def delay_seconds(self) -> float:
        return max(self.min_delay_ms, self.delay_ms) / 1000.0


class BatchRunner:
    """
    Sends every row through a dispatcher, one at a time, with a pause between requests.

    Rows that already succeeded are skipped, so calling :meth:`run` again
    resumes a cancelled or partially failed batch. :meth:`cancel` stops the
    loop before the next row; a request already in flight is still recorded.
    """

    def __init__(self, dispatcher: RequestDispatcher, rows: Sequence[Mapping[str, str]], config: Optional[RunnerConfig] = None) -> None:
        self._dispatcher = dispatcher
        self._config = config or RunnerConfig()
        self._logs: List[JobLog] = [JobLog(id=i, data=dict(row)) for i, row in enumerate(rows)]
        self._lock = threading.Lock()
        self._cancel = threading.Event()
        self._running = False
        self._processed = 0

    @property
    def logs(self) -> List[JobLog]:
        with self._lock:
            return [log.model_copy() for log in self._logs]

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def stats(self) -> RunStats:
        with self._lock:
            counts: Dict[JobStatus, int] = {s: 0 for s in JobStatus}
            for log in self._logs:
                counts[log.status] += 1
            return RunStats(
                total=len(self._logs),
                success=counts[JobStatus.SUCCESS],
                error=counts[JobStatus.ERROR],
                pending=counts[JobStatus.PENDING],
            )

    @property
    def progress(self) -> float:
        if not self._logs:
            return 1.0
        return min(1.0, self._processed / len(self._logs))

    def run(self) -> RunStats:
        with self._lock:
            if self._running:
                raise RunnerBusyError("A batch run is already in progress.")
            self._running = True
            self._cancel.clear()
            self._processed = 0

        try:
            self._run_loop()
        finally:
            self._running = False

        return self.stats

    def _run_loop(self) -> None:
        delay = self._config.delay_seconds
        sent_any = False

        for i in range(len(self._logs)):
            if self._logs[i].status == JobStatus.SUCCESS:
                self._processed = i + 1
                continue

            if sent_any:
                self._cancel.wait(delay)

            if self._cancel.is_set():
                self._log("Batch cancelled before row %d", i)
                return

            self._send(i)
            sent_any = True
            self._processed = i + 1

    def cancel(self) -> None:
        self._cancel.set()

    def retry(self, index: int) -> JobLog:
        """Re-send a single row outside the main loop."""
        self._check_index(index)
        return self._send(index)

    def update_row(self, index: int, row: Mapping[str, str]) -> JobLog:
        self._check_index(index)
        with self._lock:
            self._logs[index] = JobLog(id=index, data=dict(row))
            return self._logs[index].model_copy()

    def reset(self) -> None:
        with self._lock:
            self._logs = [JobLog(id=log.id, data=log.data) for log in self._logs]
            self._processed = 0

    def _send(self, index: int) -> JobLog:
        with self._lock:
            sent = self._logs[index]

        result: DispatchResult = self._dispatcher.send(sent.data)

        with self._lock:
            if self._logs[index] is not sent:
                self._log("Row %d changed while its request was in flight; result discarded", index)
                return self._logs[index].model_copy()

            log = sent.model_copy(update={
                "status": JobStatus.SUCCESS if result.ok else JobStatus.ERROR,
                "status_code": result.status_code,
                "response": result.response_preview,
                "timestamp": datetime.now(),
            })
            self._logs[index] = log

        if not result.ok:
            self._log("Row %d failed with status %s: %s", index, result.status_code, result.response_preview, level=logging.WARNING)

        if self._config.on_result:
            self._config.on_result(log)

        return log

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._logs):
            raise IndexError(f"Row index {index} out of range (0..{len(self._logs) - 1}).")

    def _log(self, msg: str, *args, level: int = logging.INFO) -> None:
        if self._config.logger:
            self._config.logger.log(level, msg, *args)
