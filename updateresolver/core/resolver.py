"""Update resolution: deciding whether a newer release exists.

:class:`UpdateResolver` owns one :class:`UpdateChecker`, an ordered chain
of :class:`UpdateFilter` objects and one :class:`VersionComparator`, and
drives them through a resolution cycle:

1. ``resolve(version)`` records *version* as the baseline and starts the
   checker's asynchronous check.
2. When the checker fires ``finished``, the candidate list is folded
   through the filters in registration order, the first remaining
   candidate is taken as the preferred release, and the comparator decides
   whether it is strictly newer than the baseline.
3. Exactly one of ``update_available(update)``, ``update_not_available()``
   or ``error(kind)`` is emitted, and the resolver is idle again.

The resolver never ranks candidates itself: checkers deliver them in
priority order and filters preserve that order. "First wins", even when a
later candidate carries a higher version.

Caveats:

* Calling ``resolve`` again while a check is in flight does not restart or
  cancel the check; it only replaces the baseline the pending result will
  be compared against. Hosts that need overlapping resolutions should use
  one resolver per check.
* There is no timeout. A checker that never completes leaves the resolver
  in :attr:`ResolverState.CHECKING`; use a checker with its own timeout or
  replace it with :meth:`UpdateResolver.set_update_checker`.

Typical usage::

    resolver = UpdateResolver(
        ManifestUpdateChecker("releases.json"),
        filters=[StableReleaseFilter()],
        current_version_provider=distribution_version_provider("myapp"),
    )
    resolver.update_available.connect(lambda update: print("new:", update))
    resolver.update_not_available.connect(lambda: print("up to date"))
    resolver.resolve()

    # or, from a coroutine
    update = await resolver.resolve_async("1.2.0")
"""

from __future__ import annotations

import asyncio
from importlib import metadata
from typing import Callable, Iterable, List, Optional, Tuple, Union

from updateresolver.config import UpdateResolverConfig
from updateresolver.core.checker import UpdateChecker
from updateresolver.core.comparators import (
    SemVerVersionComparator,
    VersionComparator,
    get_comparator,
)
from updateresolver.core.filters import (
    FunctionFilter,
    PythonCompatibilityFilter,
    StableReleaseFilter,
    UpdateFilter,
)
from updateresolver.exceptions import (
    InvalidVersionError,
    ResolveFailedError,
)
from updateresolver.models import ResolveError, ResolverState, Update
from updateresolver.utils.logger import get_logger
from updateresolver.utils.signals import Signal

logger = get_logger("core.resolver")

#: Returns the host application's current version; raises ``LookupError``
#: when it cannot be determined.
VersionProvider = Callable[[], str]

FilterLike = Union[UpdateFilter, Callable[[List[Update]], List[Update]]]


class UpdateResolver:
    """Resolves whether an update is available for a given version.

    Args:
        checker: Initial update checker. Can be set later with
            :meth:`set_update_checker`.
        filters: Initial filter chain, applied in the given order.
        comparator: Version comparator. When omitted, a
            :class:`SemVerVersionComparator` is created the first time a
            comparison is needed.
        current_version_provider: Callable returning the host application's
            version; used by :meth:`resolve` when called without arguments.

    Attributes:
        update_available: Fired with the selected :class:`Update`.
        update_not_available: Fired with no arguments.
        error: Fired with a :class:`ResolveError`.
    """

    def __init__(
        self,
        checker: Optional[UpdateChecker] = None,
        filters: Iterable[FilterLike] = (),
        comparator: Optional[VersionComparator] = None,
        *,
        current_version_provider: Optional[VersionProvider] = None,
    ) -> None:
        self.update_available = Signal("update_available")
        self.update_not_available = Signal("update_not_available")
        self.error = Signal("error")

        self.current_version_provider = current_version_provider

        self._version: str = ""
        self._checker: Optional[UpdateChecker] = None
        self._filters: List[UpdateFilter] = []
        self._comparator: Optional[VersionComparator] = comparator
        self._error_string: str = ""
        self._state: ResolverState = ResolverState.IDLE

        if checker is not None:
            self.set_update_checker(checker)
        for update_filter in filters:
            self.add_update_filter(update_filter)

    @classmethod
    def from_config(
        cls,
        config: UpdateResolverConfig,
        checker: Optional[UpdateChecker] = None,
        *,
        current_version_provider: Optional[VersionProvider] = None,
    ) -> "UpdateResolver":
        """Build a resolver whose comparator and filters follow *config*.

        Raises:
            ConfigError: The configured comparator name is unknown.
        """
        filters: List[UpdateFilter] = []
        if config.stable_only:
            filters.append(StableReleaseFilter())
        if config.python_compatible_only:
            filters.append(PythonCompatibilityFilter())

        return cls(
            checker,
            filters,
            get_comparator(config.comparator),
            current_version_provider=current_version_provider,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> ResolverState:
        return self._state

    @property
    def baseline_version(self) -> str:
        """Version the current (or last) resolution compares against."""
        return self._version

    @property
    def update_checker(self) -> Optional[UpdateChecker]:
        return self._checker

    @property
    def filters(self) -> Tuple[UpdateFilter, ...]:
        return tuple(self._filters)

    @property
    def version_comparator(self) -> Optional[VersionComparator]:
        """The configured comparator, or ``None`` if the default is not yet materialized."""
        return self._comparator

    def error_string(self) -> str:
        """Return the detail of the last failed resolution."""
        return self._error_string

    def _set_error_string(self, text: str) -> None:
        self._error_string = text

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, version: Optional[str] = None) -> None:
        """Start a resolution cycle against *version*.

        Without *version*, the current-version provider is asked. If there
        is no provider, or it raises :class:`LookupError`, nothing happens.

        If no checker is attached, ``error(INVALID_CHECKER_ERROR)`` is
        emitted before this method returns and no check is started.

        Raises:
            CheckerError: The checker refused to start (for example, an
                asynchronous checker with no running event loop).
            Exception: Anything else raised by ``check()`` is re-raised
                after the resolver unsubscribes and returns to ``IDLE``.
        """
        if version is None:
            version = self._current_version()
            if version is None:
                return

        if self._checker is None:
            logger.debug("resolve(%r): no update checker attached", version)
            self._set_error_string("")
            self.error.emit(ResolveError.INVALID_CHECKER_ERROR)
            return

        if self._state is ResolverState.CHECKING:
            logger.warning(
                "resolve(%r) called while a check is in flight; "
                "baseline %r will be replaced",
                version,
                self._version,
            )

        checker = self._checker
        self._version = version
        self._connect(checker)
        self._state = ResolverState.CHECKING
        logger.debug("Resolving updates from %r with %r", version, checker)

        try:
            checker.check()
        except Exception:
            self._disconnect(checker)
            self._state = ResolverState.IDLE
            raise

    async def resolve_async(self, version: Optional[str] = None) -> Optional[Update]:
        """Run one resolution cycle and wait for its outcome.

        Returns:
            The selected update, or ``None`` when no update is available or
            the current version cannot be determined.

        Raises:
            ResolveFailedError: The resolver emitted ``error``.
        """
        if version is None:
            version = self._current_version()
            if version is None:
                return None

        outcome: asyncio.Future[Optional[Update]] = (
            asyncio.get_running_loop().create_future()
        )

        def on_available(update: Update) -> None:
            if not outcome.done():
                outcome.set_result(update)

        def on_not_available() -> None:
            if not outcome.done():
                outcome.set_result(None)

        def on_error(kind: ResolveError) -> None:
            if not outcome.done():
                outcome.set_exception(
                    ResolveFailedError(
                        f"Update resolution failed: {kind.name}",
                        kind=kind,
                        error_string=self._error_string,
                    )
                )

        self.update_available.connect(on_available)
        self.update_not_available.connect(on_not_available)
        self.error.connect(on_error)
        try:
            self.resolve(version)
            return await outcome
        finally:
            self.update_available.disconnect(on_available)
            self.update_not_available.disconnect(on_not_available)
            self.error.disconnect(on_error)

    def update_from(self, version: str) -> Optional[Update]:
        """Decide, from the checker's completed result, whether to update.

        The checker's candidates are folded through every filter in
        registration order; the first remaining candidate is returned if
        the comparator ranks it strictly newer than *version*.

        Returns:
            The selected update, or ``None`` if *version* is empty, no
            checker is attached, no candidate survives the filters, or the
            first candidate is not newer.

        Raises:
            InvalidVersionError: The comparator cannot interpret the
                candidate or *version*.
        """
        if not version:
            return None
        if self._checker is None:
            return None

        comparator = self._ensure_comparator()

        candidates = self._checker.updates()
        for update_filter in self._filters:
            candidates = update_filter.filter(candidates)

        if not candidates:
            logger.debug("No candidates left after %d filter(s)", len(self._filters))
            return None

        update = candidates[0]
        if comparator.compare(update.version, version) > 0:
            return update
        return None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_update_checker(self, checker: Optional[UpdateChecker]) -> None:
        """Attach *checker*, detaching and disposing the previous one.

        Any result the previous checker delivers afterwards is discarded;
        a resolution in flight against it is abandoned without an event.
        Passing ``None`` only detaches.
        """
        if checker is self._checker:
            return

        previous = self._checker
        if previous is not None:
            self._disconnect(previous)
            previous.dispose()
            if self._state is ResolverState.CHECKING:
                logger.debug("Abandoning in-flight check on %r", previous)
                self._state = ResolverState.IDLE

        self._checker = checker
        if checker is not None:
            self._connect(checker)

    def add_update_filter(self, update_filter: FilterLike) -> None:
        """Append a filter to the end of the chain.

        Plain callables are wrapped in :class:`FunctionFilter`.
        """
        if not isinstance(update_filter, UpdateFilter):
            if not callable(update_filter):
                raise TypeError(
                    f"Expected an UpdateFilter or callable, got {update_filter!r}"
                )
            update_filter = FunctionFilter(update_filter)
        self._filters.append(update_filter)

    def set_version_comparator(self, comparator: VersionComparator) -> None:
        """Replace the comparator, disposing the previous one."""
        if comparator is self._comparator:
            return
        if self._comparator is not None:
            self._comparator.dispose()
        self._comparator = comparator

    # ------------------------------------------------------------------
    # Checker notifications (private)
    # ------------------------------------------------------------------

    def _on_checker_finished(self) -> None:
        if self._checker is not None:
            self._disconnect(self._checker)
        self._state = ResolverState.IDLE

        try:
            update = self.update_from(self._version)
        except InvalidVersionError as exc:
            logger.warning("Cannot compare versions: %s", exc)
            self._set_error_string(str(exc))
            self.error.emit(ResolveError.INVALID_VERSION_ERROR)
            return
        except Exception as exc:
            logger.exception("Update selection failed after %r finished", self._checker)
            self._set_error_string(str(exc) or type(exc).__name__)
            self.error.emit(ResolveError.UNKNOWN_CHECK_ERROR)
            return

        if update is not None:
            logger.debug("Update available: %s -> %s", self._version, update.version)
            self.update_available.emit(update)
        else:
            logger.debug("No update available for %s", self._version)
            self.update_not_available.emit()

    def _on_checker_error(self, code: int) -> None:
        self._state = ResolverState.IDLE
        if self._checker is None:
            return

        self._disconnect(self._checker)
        self._set_error_string(self._checker.error_string())
        logger.debug("Check failed with code %d: %s", code, self._error_string)
        self.error.emit(ResolveError.UNKNOWN_CHECK_ERROR)

    # ------------------------------------------------------------------
    # Helpers (private)
    # ------------------------------------------------------------------

    def _connect(self, checker: UpdateChecker) -> None:
        checker.finished.connect(self._on_checker_finished)
        checker.error.connect(self._on_checker_error)

    def _disconnect(self, checker: UpdateChecker) -> None:
        checker.finished.disconnect(self._on_checker_finished)
        checker.error.disconnect(self._on_checker_error)

    def _ensure_comparator(self) -> VersionComparator:
        if self._comparator is None:
            self._comparator = SemVerVersionComparator()
        return self._comparator

    def _current_version(self) -> Optional[str]:
        if self.current_version_provider is None:
            logger.debug("resolve(): no current version provider; nothing to do")
            return None
        try:
            return self.current_version_provider()
        except LookupError as exc:
            logger.debug("resolve(): current version unavailable: %s", exc)
            return None


def distribution_version_provider(distribution: str) -> VersionProvider:
    """Return a provider reading *distribution*'s installed version.

    The provider raises :class:`LookupError` when the distribution is not
    installed, which makes :meth:`UpdateResolver.resolve` a no-op.

    Example::

        >>> resolver = UpdateResolver(
        ...     checker,
        ...     current_version_provider=distribution_version_provider("myapp"),
        ... )
    """

    def provider() -> str:
        try:
            return metadata.version(distribution)
        except metadata.PackageNotFoundError as exc:
            raise LookupError(f"Distribution {distribution!r} is not installed") from exc

    return provider
