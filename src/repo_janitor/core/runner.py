"""
Concurrent cleanup of many repositories.

Each repository gets its own unit of work. Units share nothing except the
result sink, a thread-safe queue that every unit writes its CleanupResult
into. The runner joins all units before the sink is read.
"""

import logging
import queue
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from repo_janitor.core.sequencer import CleanupSequencer
from repo_janitor.models.cleanup import BatchReport, CleanupResult, CleanupStatus

logger = logging.getLogger(__name__)

ResultCallback = Callable[[CleanupResult], None]


class BatchRunner:
    """
    Runs the cleanup sequence for every repository concurrently.

    By default one worker thread is started per repository, so no
    repository ever waits for another.
    """

    def __init__(
        self,
        sequencer: Optional[CleanupSequencer] = None,
        max_workers: Optional[int] = None,
    ):
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.sequencer = sequencer or CleanupSequencer()
        self.max_workers = max_workers

    def run(
        self,
        repository_paths: Iterable[Path],
        root: Optional[Path] = None,
        on_result: Optional[ResultCallback] = None,
    ) -> BatchReport:
        """
        Clean all repositories and collect their results.

        Args:
            repository_paths: Working-copy roots to clean
            root: Directory the repositories were discovered under
            on_result: Called from the calling thread as each repository finishes

        Returns:
            BatchReport with one result per repository, ordered by path
        """
        paths = [Path(p) for p in repository_paths]
        sink: "queue.Queue[CleanupResult]" = queue.Queue()

        if paths:
            workers = self.max_workers or len(paths)
            logger.info(f"Cleaning {len(paths)} repositories with {workers} workers")

            with ThreadPoolExecutor(
                max_workers=workers,
                thread_name_prefix="repo-janitor",
            ) as pool:
                futures = [pool.submit(self._clean, path, sink) for path in paths]

                for future in as_completed(futures):
                    result = future.result()

                    if on_result:
                        on_result(result)

        results = self._drain(sink, expected=len(paths))
        successful = sum(1 for r in results if r.succeeded)

        return BatchReport(
            timestamp=datetime.now(),
            root=Path(root) if root else Path.cwd(),
            repositories_found=len(paths),
            successful=successful,
            failed=len(results) - successful,
            results=sorted(results, key=lambda r: str(r.repository_path)),
        )

    def _clean(self, path: Path, sink: "queue.Queue[CleanupResult]") -> CleanupResult:
        """Unit of work for one repository; never raises."""
        started = time.monotonic()

        try:
            result = self.sequencer.run(path)
        except Exception as e:
            logger.exception(f"Unexpected failure while cleaning {path}")
            result = CleanupResult(
                repository_path=path,
                status=CleanupStatus.ERROR,
                error=f"Unexpected error: {e}",
                duration_seconds=time.monotonic() - started,
            )

        sink.put(result)
        return result

    def _drain(self, sink: "queue.Queue[CleanupResult]", expected: int) -> List[CleanupResult]:
        """Read every result from the sink once all units have finished."""
        return [sink.get_nowait() for _ in range(expected)]
