# DEPENDENCIES
import time
import asyncio
from typing import Any
from typing import Dict
from typing import Deque
from typing import Callable
from typing import Optional
from typing import Awaitable
from collections import deque
from dataclasses import field
from dataclasses import dataclass

from utils.logger import log_info
from utils.logger import log_debug
from utils.logger import log_error
from utils.logger import log_warning
from config.settings import settings
from model_manager.errors import OtherFailure
from model_manager.errors import QuotaExceeded
from model_manager.errors import classify_error
from model_manager.errors import TransientFailure


Task = Callable[[], Awaitable[Any]]


@dataclass
class _PendingRequest:
    task         : Task
    future       : asyncio.Future
    label        : str
    submitted_at : float


@dataclass
class SchedulerStats:
    """
    Counters exposed for monitoring
    """
    submitted  : int = 0
    dispatched : int = 0
    retried    : int = 0
    succeeded  : int = 0
    failed     : int = 0
    failures   : Dict[str, int] = field(default_factory = dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"submitted"  : self.submitted,
                "dispatched" : self.dispatched,
                "retried"    : self.retried,
                "succeeded"  : self.succeeded,
                "failed"     : self.failed,
                "failures"   : dict(self.failures),
               }


class RequestScheduler:
    """
    Single-flight, quota-aware FIFO queue in front of the external reasoner

    One worker coroutine owns the queue and the rolling dispatch log: at most one
    external call is in flight, no more than max_requests calls start within any
    window_seconds span, and min_interval_seconds separates the end of one call
    from the start of the next
    """
    def __init__(self, max_requests: Optional[int] = None, window_seconds: Optional[float] = None, min_interval_seconds: Optional[float] = None,
                 max_retries: Optional[int] = None, retry_base_delay: Optional[float] = None, clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        """
        Initialize the scheduler

        Arguments:
        ----------
            max_requests         { int }   : Dispatch budget per rolling window

            window_seconds       { float } : Length of the rolling window

            min_interval_seconds { float } : Spacing between consecutive external calls

            max_retries          { int }   : Retry ceiling for transient failures

            retry_base_delay     { float } : First backoff delay, doubled on every retry

            clock                          : Monotonic time source

            sleep                          : Coroutine used for every wait
        """
        self.max_requests         = max_requests if max_requests is not None else settings.REASONER_MAX_REQUESTS_PER_WINDOW
        self.window_seconds       = window_seconds if window_seconds is not None else settings.REASONER_WINDOW_SECONDS
        self.min_interval_seconds = min_interval_seconds if min_interval_seconds is not None else settings.REASONER_MIN_INTERVAL_SECONDS
        self.max_retries          = max_retries if max_retries is not None else settings.REASONER_MAX_RETRIES
        self.retry_base_delay     = retry_base_delay if retry_base_delay is not None else settings.REASONER_RETRY_BASE_DELAY

        if (self.max_requests < 1):
            raise ValueError("max_requests must be at least 1")

        self._clock               = clock
        self._sleep               = sleep

        self._queue               : Optional[asyncio.Queue]      = None
        self._worker              : Optional[asyncio.Task]       = None
        self._loop                : Optional[asyncio.AbstractEventLoop] = None
        self._dispatch_log        : Deque[float]                 = deque()
        self._last_finished       : Optional[float]              = None
        self._stats                                              = SchedulerStats()

        log_info("RequestScheduler initialized",
                 max_requests         = self.max_requests,
                 window_seconds       = self.window_seconds,
                 min_interval_seconds = self.min_interval_seconds,
                 max_retries          = self.max_retries,
                )


    async def submit(self, task: Task, label: str = "external_call") -> Any:
        """
        Queue a task and wait for its result

        Arguments:
        ----------
            task  { callable } : Zero-argument coroutine factory performing one external call

            label   { str }    : Name used in logs

        Returns:
        --------
                 { Any }       : The task's result

        Raises:
        -------
            QuotaExceeded, TransientFailure, OtherFailure
        """
        self._ensure_worker()

        future = self._loop.create_future()
        self._queue.put_nowait(_PendingRequest(task         = task,
                                               future       = future,
                                               label        = label,
                                               submitted_at = self._clock(),
                                              ))
        self._stats.submitted += 1

        return await future


    def stats(self) -> Dict[str, Any]:
        """
        Snapshot of counters and queue depth
        """
        self._prune_window(self._clock())

        snapshot                = self._stats.to_dict()
        snapshot["queue_depth"] = self._queue.qsize() if self._queue is not None else 0
        snapshot["in_window"]   = len(self._dispatch_log)

        return snapshot


    async def close(self):
        """
        Stop the worker; queued requests that never dispatched are cancelled
        """
        if self._worker is None:
            return

        self._worker.cancel()

        try:
            await self._worker

        except asyncio.CancelledError:
            pass

        while self._queue is not None and not self._queue.empty():
            pending = self._queue.get_nowait()

            if not pending.future.done():
                pending.future.cancel()

        self._worker = None


    def _ensure_worker(self):
        """
        Start the worker on the running loop (restarting it if the loop changed)
        """
        loop = asyncio.get_running_loop()

        if (self._loop is not loop) or (self._worker is None) or self._worker.done():
            if (self._loop is not loop):
                self._queue = asyncio.Queue()

            self._loop   = loop
            self._worker = loop.create_task(self._run())


    async def _run(self):
        """
        Worker loop: serve requests strictly one at a time in FIFO order
        """
        while True:
            request = await self._queue.get()

            try:
                result = await self._execute(request)

            except asyncio.CancelledError:
                if not request.future.done():
                    request.future.cancel()

                raise

            except Exception as error:
                self._stats.failed += 1
                failure_name        = type(error).__name__
                self._stats.failures[failure_name] = self._stats.failures.get(failure_name, 0) + 1

                if not request.future.done():
                    request.future.set_exception(error)

            else:
                self._stats.succeeded += 1

                if not request.future.done():
                    request.future.set_result(result)

            finally:
                self._queue.task_done()


    async def _execute(self, request: _PendingRequest) -> Any:
        """
        Run one request with bounded retries on transient failures
        """
        attempt = 0

        while True:
            await self._acquire_slot(request.label)

            try:
                return await self._call(request.task)

            except Exception as error:
                failure = classify_error(error)

                if isinstance(failure, TransientFailure) and (attempt < self.max_retries):
                    delay    = self.retry_base_delay * (2 ** attempt)
                    attempt += 1
                    self._stats.retried += 1

                    log_warning("Transient failure from external reasoner, retrying",
                                label   = request.label,
                                attempt = attempt,
                                retries = self.max_retries,
                                delay   = delay,
                                error   = str(error),
                               )

                    await self._sleep(delay)
                    continue

                if isinstance(failure, QuotaExceeded):
                    log_warning("External reasoner quota exceeded", label = request.label)

                else:
                    log_error(failure, context = {"component" : "RequestScheduler", "label" : request.label, "attempts" : attempt + 1})

                if failure is error:
                    raise

                raise failure from error


    async def _call(self, task: Task) -> Any:
        """
        Single external call; its end time anchors the spacing of the next one

        A task that raises CancelledError while the worker itself is not being
        cancelled fails only its own request
        """
        try:
            return await task()

        except asyncio.CancelledError:
            if asyncio.current_task().cancelling():
                raise

            raise OtherFailure("External call was cancelled")

        finally:
            self._last_finished = self._clock()


    def _prune_window(self, now: float):
        """
        Drop dispatch timestamps that have left the rolling window
        """
        while self._dispatch_log and ((now - self._dispatch_log[0]) >= self.window_seconds):
            self._dispatch_log.popleft()


    async def _acquire_slot(self, label: str):
        """
        Wait until both the rolling budget and the inter-request spacing allow a dispatch
        """
        while True:
            now = self._clock()

            self._prune_window(now)

            wait = 0.0

            if (len(self._dispatch_log) >= self.max_requests):
                wait = self._dispatch_log[0] + self.window_seconds - now

            if self._last_finished is not None:
                wait = max(wait, self._last_finished + self.min_interval_seconds - now)

            if (wait <= 0):
                break

            if (len(self._dispatch_log) >= self.max_requests):
                log_info("Rate limit reached, waiting before next external call",
                         label        = label,
                         wait_seconds = round(wait, 3),
                         queue_depth  = self._queue.qsize(),
                        )

            await self._sleep(wait)

        self._dispatch_log.append(now)
        self._stats.dispatched += 1

        log_debug("External call dispatched", label = label, in_window = len(self._dispatch_log))
