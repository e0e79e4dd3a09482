"""Concurrent execution of resource jobs, with optional progress display."""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from page_loader.models.resource import ResourceJob

logger = logging.getLogger(__name__)

JobAction = Callable[[ResourceJob], Awaitable[None]]


class JobObserver:
    """Receives per-job lifecycle events.  The base class ignores them all."""

    def __enter__(self) -> "JobObserver":
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def job_started(self, job: ResourceJob) -> None:
        pass

    def job_finished(self, job: ResourceJob) -> None:
        pass

    def job_failed(self, job: ResourceJob, exc: BaseException) -> None:
        pass


class RichProgressObserver(JobObserver):
    """Shows one line per job with a spinner while it downloads."""

    def __init__(self, console: Optional[Console] = None):
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✔[/green]"),
            TextColumn("{task.description}"),
            console=console or Console(stderr=True),
        )
        self._tasks = {}

    def __enter__(self) -> "RichProgressObserver":
        self._progress.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self._progress.stop()

    def job_started(self, job: ResourceJob) -> None:
        self._tasks[id(job)] = self._progress.add_task(job.title, total=1)

    def job_finished(self, job: ResourceJob) -> None:
        self._progress.update(self._tasks[id(job)], completed=1)

    def job_failed(self, job: ResourceJob, exc: BaseException) -> None:
        self._progress.update(
            self._tasks[id(job)],
            description=f"[red]✖ {job.title}[/red]",
            completed=1,
        )


async def run_jobs(
    jobs: List[ResourceJob],
    action: JobAction,
    observer: Optional[JobObserver] = None,
    max_concurrency: Optional[int] = None,
) -> None:
    """Run *action* once for every job, all at the same time.

    With *max_concurrency* set, at most that many jobs are in flight.  The
    first failure cancels the jobs still running and is then re-raised.
    """
    observer = observer or JobObserver()
    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def _run(job: ResourceJob) -> None:
        if semaphore is not None:
            async with semaphore:
                await _observe(job)
        else:
            await _observe(job)

    async def _observe(job: ResourceJob) -> None:
        observer.job_started(job)
        try:
            await action(job)
        except Exception as exc:
            observer.job_failed(job, exc)
            raise
        observer.job_finished(job)

    with observer:
        tasks = [asyncio.ensure_future(_run(job)) for job in jobs]
        try:
            await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            # Let cancelled downloads unwind before the client is closed
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    logger.debug("All jobs finished", extra={"jobs": len(jobs)})
