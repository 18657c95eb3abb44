"""Progress events passed from scan workers to a single listener.

Workers never touch shared counters: they put ScanEvents on a queue and
one ProgressListener thread turns them into log lines and progress bar
updates.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Literal

from rich.progress import Progress, TaskID

logger = logging.getLogger(__name__)

EventKind = Literal["rejected", "queued", "started", "finished", "failed"]


@dataclass(frozen=True)
class ScanEvent:
    """Something that happened to a candidate during the scan.

    Attributes:
        kind: "rejected" (unreadable archive), "queued" (total known),
            "started", "finished" or "failed"
        name: Candidate or archive name
        message: Extra detail (error message, match rate, candidate count)
        total: Number of candidates, only set on "queued"
    """

    kind: EventKind
    name: str = ""
    message: str = ""
    total: int | None = None


class ProgressListener:
    """Consume ScanEvents on a background thread.

    Usage:
        events: queue.Queue[ScanEvent | None] = queue.Queue()
        with ProgressListener(events, progress=progress):
            coordinator.run(directory, events=events)

    Attributes:
        completed: Candidates scored successfully
        failed: Candidates or archives that failed
    """

    def __init__(
        self,
        events: "queue.Queue[ScanEvent | None]",
        progress: Progress | None = None,
        description: str = "Scanning strand files...",
    ) -> None:
        self.events = events
        self.progress = progress
        self.description = description
        self.completed = 0
        self.failed = 0
        self._task: TaskID | None = None
        self._thread = threading.Thread(
            target=self._consume, name="progress-listener", daemon=True
        )

    def start(self) -> None:
        if self.progress is not None:
            self._task = self.progress.add_task(self.description, total=None)
        self._thread.start()

    def stop(self) -> None:
        """Signal the end of the event stream and wait for the thread."""
        self.events.put(None)
        self._thread.join()

    def __enter__(self) -> "ProgressListener":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _consume(self) -> None:
        while True:
            event = self.events.get()
            if event is None:
                break
            self.handle(event)

    def handle(self, event: ScanEvent) -> None:
        """Log one event and advance the progress bar."""
        if event.kind == "queued":
            logger.info("%d candidate strand files found", event.total or 0)
            if self.progress is not None and self._task is not None:
                self.progress.update(self._task, total=event.total)
        elif event.kind == "started":
            logger.info("Scanning %s", event.name)
        elif event.kind == "finished":
            self.completed += 1
            logger.info("Finished %s %s", event.name, event.message)
            self._advance(event.name)
        elif event.kind == "failed":
            self.failed += 1
            logger.warning("Excluded %s: %s", event.name, event.message)
            self._advance(event.name)
        elif event.kind == "rejected":
            self.failed += 1
            logger.warning("Skipped archive %s: %s", event.name, event.message)

    def _advance(self, name: str) -> None:
        if self.progress is not None and self._task is not None:
            self.progress.update(
                self._task, advance=1, description=f"Scanned {name}"
            )
