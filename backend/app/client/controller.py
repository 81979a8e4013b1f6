"""View-model for the correction page.

All UI state lives in one :class:`ViewState`; the transition functions take
that state explicitly and the :class:`CorrectorController` owns the timers
and the in-flight request. Starting a new correction or tone request cancels
the one still running, so a stale reply never overwrites a newer one.
"""

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, fields
from typing import TypeVar

from app.client.api import AutocorrectApiClient
from app.client.errors import ClientError
from app.client.highlight import highlight_wrong_words
from app.models.correction import CorrectionResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_INPUT_MESSAGE = "Please enter some text to correct."
ERROR_DISPLAY_SECONDS = 5.0
COPY_MESSAGE_SECONDS = 2.0


class ViewStatus(str, enum.Enum):
    idle = "idle"
    loading = "loading"
    result_shown = "result_shown"
    error = "error"


@dataclass
class ViewState:
    """Everything the page renders."""

    input_text: str = ""
    status: ViewStatus = ViewStatus.idle
    highlighted_html: str = ""
    corrected_text: str | None = None
    wrong_words: list[str] = field(default_factory=list)
    tone: str | None = None
    error_message: str | None = None
    copy_message_visible: bool = False

    @property
    def has_result(self) -> bool:
        return self.corrected_text is not None

    @property
    def controls_disabled(self) -> bool:
        return self.status is ViewStatus.loading


# ---------------------------------------------------------------------------
# State transitions
# ---------------------------------------------------------------------------


def show_loading(state: ViewState) -> None:
    state.status = ViewStatus.loading


def show_correction(state: ViewState, result: CorrectionResult) -> None:
    state.corrected_text = result.corrected_text
    state.wrong_words = result.unique_wrong_words()
    state.highlighted_html = highlight_wrong_words(state.input_text, state.wrong_words)
    state.tone = None
    state.error_message = None
    state.status = ViewStatus.result_shown


def show_rewrite(state: ViewState, new_text: str, tone: str) -> None:
    state.corrected_text = new_text
    state.tone = tone
    state.error_message = None
    state.status = ViewStatus.result_shown


def show_error(state: ViewState, message: str) -> None:
    state.error_message = message or "An unknown error occurred."
    state.status = ViewStatus.error


def hide_error(state: ViewState) -> None:
    state.error_message = None
    if state.status is ViewStatus.error:
        state.status = ViewStatus.result_shown if state.has_result else ViewStatus.idle


def reset(state: ViewState) -> None:
    fresh = ViewState()
    for f in fields(state):
        setattr(state, f.name, getattr(fresh, f.name))


class _Superseded(Exception):
    """The awaited request was cancelled in favour of a newer one."""


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


class CorrectorController:
    """Drives :class:`ViewState` from user actions."""

    def __init__(
        self,
        api: AutocorrectApiClient,
        state: ViewState | None = None,
        *,
        error_display_seconds: float = ERROR_DISPLAY_SECONDS,
        copy_message_seconds: float = COPY_MESSAGE_SECONDS,
    ) -> None:
        self.api = api
        self.state = state or ViewState()
        self.error_display_seconds = error_display_seconds
        self.copy_message_seconds = copy_message_seconds
        self._inflight: asyncio.Task | None = None
        self._timers: dict[str, asyncio.Task] = {}

    # -- timers -------------------------------------------------------------

    def _start_timer(self, name: str, delay: float, action: Callable[[ViewState], None]) -> None:
        """Run *action* after *delay*, replacing any pending timer of the same name."""
        self._cancel_timer(name)

        async def _fire() -> None:
            await asyncio.sleep(delay)
            action(self.state)

        self._timers[name] = asyncio.create_task(_fire())

    def _cancel_timer(self, name: str) -> None:
        timer = self._timers.pop(name, None)
        if timer is not None and not timer.done():
            timer.cancel()

    def cancel_timers(self) -> None:
        for name in list(self._timers):
            self._cancel_timer(name)

    # -- requests -----------------------------------------------------------

    def _cancel_inflight(self) -> None:
        task, self._inflight = self._inflight, None
        if task is not None and not task.done():
            task.cancel()

    async def _run_latest(self, request: Awaitable[T]) -> T:
        """Await *request* as the only request in flight."""
        self._cancel_inflight()
        task = asyncio.ensure_future(request)
        self._inflight = task
        try:
            result = await task
        except asyncio.CancelledError:
            if self._inflight is not task:
                raise _Superseded() from None
            raise
        else:
            # A newer request or a clear can land after the task finished
            # but before this coroutine resumed.
            if self._inflight is not task:
                raise _Superseded()
            return result
        finally:
            if self._inflight is task:
                self._inflight = None

    def _fail(self, message: str) -> None:
        show_error(self.state, message)
        self._start_timer("error", self.error_display_seconds, hide_error)

    # -- user actions -------------------------------------------------------

    def set_input(self, text: str) -> None:
        self.state.input_text = text

    async def handle_correct(self) -> None:
        text = self.state.input_text
        if not text.strip():
            self._fail(EMPTY_INPUT_MESSAGE)
            return

        show_loading(self.state)
        try:
            result = await self._run_latest(self.api.correct(text))
        except _Superseded:
            return
        except ClientError as exc:
            logger.error("Error during correction: %s", exc)
            self._fail(f"Failed to get correction: {exc}")
            return

        show_correction(self.state, result)

    async def handle_change_tone(self, tone: str) -> None:
        """Rewrite the displayed output (or the input, before any correction)."""
        source = self.state.corrected_text if self.state.has_result else self.state.input_text
        if not source or not source.strip():
            self._fail(EMPTY_INPUT_MESSAGE)
            return

        show_loading(self.state)
        try:
            result = await self._run_latest(self.api.change_tone(source, tone))
        except _Superseded:
            return
        except ClientError as exc:
            logger.error("Error during tone change: %s", exc)
            self._fail(f"Failed to change tone: {exc}")
            return

        show_rewrite(self.state, result.new_text, tone)

    def handle_copy(self) -> str:
        """Return the text to put on the clipboard and flash the copy message."""
        self.state.copy_message_visible = True
        self._start_timer("copy", self.copy_message_seconds, _hide_copy_message)
        return self.state.corrected_text or ""

    def handle_clear(self) -> None:
        self._cancel_inflight()
        self.cancel_timers()
        reset(self.state)


def _hide_copy_message(state: ViewState) -> None:
    state.copy_message_visible = False
