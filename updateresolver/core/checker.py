"""Update checkers: the asynchronous source of release candidates.

A checker is the resolver's only window onto "what releases exist". The
contract is small:

* :meth:`UpdateChecker.check` starts a check and returns immediately.
* Exactly one of the ``finished`` or ``error(code)`` signals fires for
  every ``check()`` call that was accepted.
* :meth:`UpdateChecker.updates` is meaningful only after ``finished``;
  the list is in priority order (first element = preferred release).
* :meth:`UpdateChecker.error_string` is meaningful only after ``error``.

Most implementations subclass :class:`AsyncUpdateChecker` and write a
single ``async def fetch()`` coroutine; the base class takes care of task
scheduling, signal emission and disposal.

Typical usage::

    checker = ManifestUpdateChecker("releases.json")
    checker.finished.connect(lambda: print(checker.updates()))
    checker.error.connect(lambda code: print(checker.error_string()))
    checker.check()          # inside a running event loop
"""

from __future__ import annotations

import json
import asyncio
from pathlib import Path
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Union

from updateresolver.constants import MANIFEST_RELEASES_KEY, MAX_MANIFEST_SIZE
from updateresolver.exceptions import (
    CheckError,
    CheckerError,
    InvalidVersionError,
    ManifestError,
)
from updateresolver.models import CheckErrorCode, Update
from updateresolver.utils.logger import get_logger
from updateresolver.utils.signals import Signal

logger = get_logger("core.checker")

UpdateLike = Union[Update, str]


class UpdateChecker(ABC):
    """Base class for all update checkers.

    Subclasses implement :meth:`check`. A check starts by calling
    :meth:`_begin` and ends by calling exactly one of :meth:`_finish` or
    :meth:`_fail`; the helpers drop any second completion for the same
    check so listeners observe exactly one signal.

    Attributes:
        finished: Fired with no arguments when a check succeeds.
        error: Fired with an ``int`` error code when a check fails.
    """

    def __init__(self) -> None:
        self.finished = Signal("finished")
        self.error = Signal("error")
        self._updates: List[Update] = []
        self._error_string: str = ""
        self._pending: bool = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @abstractmethod
    def check(self) -> None:
        """Start a check. Must not block."""

    def updates(self) -> List[Update]:
        """Return a copy of the candidates found by the last successful check."""
        return list(self._updates)

    def error_string(self) -> str:
        """Return the failure detail of the last failed check."""
        return self._error_string

    @property
    def is_checking(self) -> bool:
        """True between an accepted ``check()`` and its completion."""
        return self._pending

    def dispose(self) -> None:
        """Release resources and drop every listener.

        After disposal no further signal reaches anyone who was connected.
        """
        self._pending = False
        self.finished.disconnect()
        self.error.disconnect()

    # ------------------------------------------------------------------
    # Completion helpers (for subclasses)
    # ------------------------------------------------------------------

    def _begin(self) -> None:
        self._pending = True
        self._updates = []
        self._error_string = ""

    def _finish(self, updates: Iterable[Update]) -> None:
        if not self._pending:
            logger.debug("%s: ignoring completion with no check pending", self)
            return
        self._pending = False
        self._updates = list(updates)
        logger.debug("%s: check finished with %d candidate(s)", self, len(self._updates))
        self.finished.emit()

    def _fail(self, code: int, message: str) -> None:
        if not self._pending:
            logger.debug("%s: ignoring failure with no check pending", self)
            return
        self._pending = False
        self._error_string = message
        logger.warning("%s: check failed (code %d): %s", self, int(code), message)
        self.error.emit(int(code))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class AsyncUpdateChecker(UpdateChecker):
    """Checker whose work is a single coroutine run on the event loop.

    :meth:`check` schedules :meth:`fetch` as an :class:`asyncio.Task` and
    returns at once. A :class:`CheckError` raised by ``fetch`` becomes
    ``error(exc.code)``; any other exception becomes
    ``error(CheckErrorCode.UNKNOWN)``. Cancelling the task (see
    :meth:`dispose`) emits nothing.

    Checks are single-flight: calling ``check()`` while a fetch is running
    reuses the running fetch.
    """

    def __init__(self) -> None:
        super().__init__()
        self._task: Optional[asyncio.Task[None]] = None

    @abstractmethod
    async def fetch(self) -> List[Update]:
        """Produce the candidate list, highest priority first."""

    def check(self) -> None:
        if self._task is not None and not self._task.done():
            logger.debug("%s: check already in flight", self)
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise CheckerError(
                f"{self.__class__.__name__}.check() requires a running event loop"
            ) from exc

        self._begin()
        self._task = loop.create_task(self._run())

    async def wait(self) -> None:
        """Wait for the in-flight check, if any, to complete."""
        if self._task is not None:
            await asyncio.shield(self._task)

    def dispose(self) -> None:
        if self._task is not None and not self._task.done():
            logger.debug("%s: cancelling in-flight check", self)
            self._task.cancel()
        self._task = None
        super().dispose()

    async def _run(self) -> None:
        try:
            updates = await self.fetch()
        except asyncio.CancelledError:
            self._pending = False
            raise
        except CheckError as exc:
            self._fail(exc.code, exc.message)
            return
        except Exception as exc:
            logger.debug("%s: unexpected error during fetch", self, exc_info=True)
            self._fail(CheckErrorCode.UNKNOWN, str(exc) or type(exc).__name__)
            return

        self._finish(updates)


class StaticUpdateChecker(AsyncUpdateChecker):
    """Checker that serves a fixed candidate list.

    Completion is always delivered on a later event-loop iteration, never
    from inside ``check()``, so it behaves like a real remote check.

    Args:
        updates: Candidates in priority order. Plain strings are turned
            into :class:`Update` objects.
        error: If given, every check fails with this error instead.
        delay: Seconds to wait before completing.

    Example::

        >>> checker = StaticUpdateChecker(["2.0.0", "1.5.0"])
    """

    def __init__(
        self,
        updates: Iterable[UpdateLike] = (),
        *,
        error: Optional[CheckError] = None,
        delay: float = 0.0,
    ) -> None:
        super().__init__()
        self.candidates: List[Update] = [_as_update(item) for item in updates]
        self.failure = error
        self.delay = delay

    async def fetch(self) -> List[Update]:
        await asyncio.sleep(max(self.delay, 0.0))
        if self.failure is not None:
            raise self.failure
        return list(self.candidates)

    def __repr__(self) -> str:
        return f"StaticUpdateChecker(candidates={len(self.candidates)})"


class ManifestUpdateChecker(AsyncUpdateChecker):
    """Checker that reads releases from a local JSON manifest.

    The manifest is either a list of release objects or an object with a
    ``releases`` list. Each release needs a ``version``; ``download_url``
    (or ``url``), ``release_notes`` (or ``notes``) and ``requires_python``
    are recognised, anything else is kept as metadata. Releases are listed
    in priority order.

    The file is read in a worker thread so the event loop never blocks.

    Args:
        path: Path to the manifest.
        max_size: Largest manifest accepted, in bytes.

    Example manifest::

        {"releases": [
            {"version": "2.1.0", "url": "https://example.org/app-2.1.0.tar.gz"},
            {"version": "2.1.0rc1", "notes": "Release candidate"}
        ]}
    """

    def __init__(
        self,
        path: Union[str, Path],
        *,
        max_size: int = MAX_MANIFEST_SIZE,
    ) -> None:
        super().__init__()
        self.path = Path(path)
        self.max_size = max_size

    async def fetch(self) -> List[Update]:
        return await asyncio.to_thread(self.load)

    def load(self) -> List[Update]:
        """Read and parse the manifest synchronously.

        Raises:
            ManifestError: The file is missing, too large, unreadable, or
                not a valid manifest.
        """
        data = _parse_json(self._read_text(), self.path)

        if isinstance(data, dict):
            releases = data.get(MANIFEST_RELEASES_KEY)
        else:
            releases = data

        if not isinstance(releases, list):
            raise ManifestError(
                f"Manifest must be a list of releases or contain a "
                f"'{MANIFEST_RELEASES_KEY}' list",
                path=str(self.path),
            )

        updates: List[Update] = []
        for index, entry in enumerate(releases):
            try:
                updates.append(Update.from_dict(entry))
            except (InvalidVersionError, TypeError) as exc:
                raise ManifestError(
                    f"Invalid release at index {index}: {exc}",
                    path=str(self.path),
                ) from exc

        logger.debug("Loaded %d release(s) from %s", len(updates), self.path)
        return updates

    def _read_text(self) -> str:
        if not self.path.is_file():
            raise ManifestError(
                f"Manifest not found: {self.path}",
                path=str(self.path),
                code=CheckErrorCode.NOT_FOUND,
            )

        size = self.path.stat().st_size
        if size > self.max_size:
            raise ManifestError(
                f"Manifest too large: {size} bytes (max {self.max_size})",
                path=str(self.path),
            )

        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestError(
                f"Cannot read manifest: {exc}",
                path=str(self.path),
                code=CheckErrorCode.UNKNOWN,
            ) from exc

    def __repr__(self) -> str:
        return f"ManifestUpdateChecker(path={str(self.path)!r})"


def _as_update(item: UpdateLike) -> Update:
    if isinstance(item, Update):
        return item
    return Update(version=item)


def _parse_json(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(
            f"Invalid JSON in {path.name}: {exc}",
            path=str(path),
        ) from exc
