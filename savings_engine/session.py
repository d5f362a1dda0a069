"""
Calculator Session

A thin stateful adapter over the projection engine. It owns the text of the
four form fields and their error messages, and recomputes whenever the form
changes. Keystrokes are debounced so bursts of input run a single
projection; presets and resets recompute immediately.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from .models import FIELD_NAMES, InputDomain, ProjectionResult
from .normalizer import InputNormalizer
from .presets import DEFAULT_VALUES, example_values, get_example
from .processor import ProjectionEngine

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.15


class Debouncer:
    """
    Runs a callback once input has been quiet for `delay` seconds.

    Each trigger cancels the pending call and schedules a new one, so only
    the latest survives.

    A timed call runs on the timer's own thread, not the caller's. Errors
    raised by the callback there are logged and dropped; `flush` runs the
    callback on the calling thread and lets errors propagate.
    """

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> None:
        """Run the pending call now, if there is one."""
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            self.callback()

    def _fire(self) -> None:
        with self._lock:
            if self._timer is None or threading.current_thread() is not self._timer:
                # Superseded or cancelled after the timer thread woke up
                return
            self._timer = None
        try:
            self.callback()
        except Exception:
            logger.exception("Debounced callback failed")


@dataclass
class FormState:
    """Current text of each field plus per-field error messages."""

    values: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_VALUES))
    errors: dict[str, str] = field(default_factory=dict)


class CalculatorSession:
    """Stateful form adapter dispatching to the projection engine."""

    def __init__(
        self,
        engine: ProjectionEngine | None = None,
        on_result: Callable[[ProjectionResult], None] | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        self.engine = engine or ProjectionEngine()
        self.on_result = on_result
        self.state = FormState()
        self.last_result: ProjectionResult | None = None
        self._debouncer = Debouncer(debounce_seconds, self.calculate)

    @classmethod
    def from_settings(cls, settings, on_result=None) -> "CalculatorSession":
        """Session honoring configured field bounds and debounce delay."""
        engine = ProjectionEngine(InputNormalizer(settings.field_specs()))
        return cls(engine=engine, on_result=on_result, debounce_seconds=settings.debounce_seconds)

    @property
    def normalizer(self):
        return self.engine.normalizer

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def input(self, field: str, raw: str) -> str:
        """
        Record a keystroke-level change and schedule a recompute.

        Returns the sanitized text that now occupies the field.
        """
        text = self.normalizer.sanitize(raw, field)
        self.state.values[field] = text
        self._debouncer.trigger()
        return text

    def commit(self, field: str) -> bool:
        """Validate a field when it loses focus. Returns the verdict."""
        result = self.normalizer.validate(self.state.values.get(field, ""), field)

        if result.valid:
            self.state.values[field] = result.text
            self.state.errors.pop(field, None)
        else:
            self.state.errors[field] = result.message
        return result.valid

    def load_example(self, key: str) -> ProjectionResult:
        """Overwrite the form with a preset and recompute immediately."""
        example = get_example(key)
        self._debouncer.cancel()
        self.state.errors.clear()
        self.state.values.update(example_values(example))
        logger.info(f"Loaded example: {example.name}")
        return self.calculate()

    def reset(self) -> ProjectionResult:
        """Restore defaults, clear errors and recompute immediately."""
        self._debouncer.cancel()
        self.state = FormState()
        return self.calculate()

    def flush(self) -> None:
        """Run a pending debounced recompute now."""
        self._debouncer.flush()

    def close(self) -> None:
        self._debouncer.cancel()

    def current_inputs(self) -> InputDomain:
        """Best-effort numeric view of the form, regardless of errors."""
        values = {
            name: self.normalizer.parse(self.state.values.get(name, ""))
            for name in FIELD_NAMES
        }
        return InputDomain(**values)

    def calculate(self) -> ProjectionResult:
        result = self.engine.project(self.current_inputs())
        self.last_result = result
        logger.debug(f"Recomputed projection: {result}")

        if self.on_result is not None:
            self.on_result(result)
        return result

    @property
    def errors(self) -> dict[str, str]:
        return dict(self.state.errors)

    @property
    def values(self) -> dict[str, str]:
        return dict(self.state.values)

