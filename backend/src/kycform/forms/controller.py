"""Form state controller.

Orchestrates a form session for the rendering layer:
1. load_form: configuration -> country behavior -> pre-fill -> field states
2. submit: validate every field, then emit the payload exactly once

All state lives on the event loop that drives the controller; `submit` is
synchronous and only touches in-memory state.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from kycform.behaviors.registry import BehaviorRegistry
from kycform.behaviors.types import CountryBehavior
from kycform.config import FormSettings
from kycform.configuration.loader import (
    ConfigurationError,
    ConfigurationLoader,
    YamlConfigurationLoader,
)
from kycform.core.types import FormData
from kycform.forms.state import FieldState
from kycform.prefill.loaders import PrefilledDataError

logger = logging.getLogger(__name__)


class FormStatus(Enum):
    """Lifecycle of a form session.

    IDLE -> LOADING -> READY -> SUBMITTING -> READY | SUBMITTED
    """

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


@dataclass(frozen=True)
class FormEvent:
    """A published state change.

    Attributes:
        name: "field_states", "field", "is_loading", "selected_country_code",
            "status" or "submission"
        value: The new value (a FieldState for "field")
    """

    name: str
    value: Any


FormListener = Callable[[FormEvent], None]
CompletionCallback = Callable[[FormData], None]


class FormController:
    """Owns the field states of one form session."""

    def __init__(
        self,
        configuration_loader: ConfigurationLoader,
        behavior_registry: BehaviorRegistry,
        default_country_code: str = "NL",
    ):
        self.configuration_loader = configuration_loader
        self.behavior_registry = behavior_registry

        self._field_states: list[FieldState] = []
        self._is_loading = False
        self._selected_country_code = default_country_code.upper()
        self._status = FormStatus.IDLE
        self._submission: FormData | None = None

        self._listeners: list[FormListener] = []
        self._completion_callbacks: list[CompletionCallback] = []

        # Most recent load scheduled by the selected_country_code setter
        self.load_task: asyncio.Task | None = None

    # -------------------------------------------------------------------------
    # Published state
    # -------------------------------------------------------------------------

    @property
    def field_states(self) -> list[FieldState]:
        return list(self._field_states)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def status(self) -> FormStatus:
        return self._status

    @property
    def submission(self) -> FormData | None:
        """The submitted payload, None until the form is submitted."""
        return dict(self._submission) if self._submission is not None else None

    @property
    def selected_country_code(self) -> str:
        return self._selected_country_code

    @selected_country_code.setter
    def selected_country_code(self, code: str) -> None:
        """Select a country and schedule a reload on the running event loop.

        Earlier loads are not cancelled; whichever finishes last wins. A load
        that fails unexpectedly is logged when its task finishes.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        loop = asyncio.get_running_loop()
        self._set_selected_country_code(code)
        task = loop.create_task(self.load_form(self._selected_country_code))
        task.add_done_callback(_log_load_failure)
        self.load_task = task

    def field(self, field_id: str) -> FieldState | None:
        for state in self._field_states:
            if state.id == field_id:
                return state
        return None

    def subscribe(self, listener: FormListener) -> Callable[[], None]:
        """Register a listener for state changes.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_complete(self, callback: CompletionCallback) -> None:
        """Register a consumer for the submitted payload.

        The payload is delivered once. Consumers registered after submission
        receive it immediately.
        """
        if self._submission is not None:
            callback(dict(self._submission))
            return
        self._completion_callbacks.append(callback)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def initialize(self) -> None:
        """Load the form for the currently selected country."""
        await self.load_form(self._selected_country_code)

    async def select_country(self, code: str) -> None:
        """Select a country and wait for its form to load."""
        self._set_selected_country_code(code)
        await self.load_form(self._selected_country_code)

    async def load_form(self, country_code: str) -> None:
        """Load configuration, behavior and pre-fill for a country.

        Configuration and pre-fill failures are logged and swallowed: a failed
        configuration leaves an empty form, a failed pre-fill leaves the
        fields empty.
        """
        if self._status == FormStatus.SUBMITTED:
            logger.warning("Ignoring load of %s: form already submitted", country_code)
            return

        self._set_loading(True)
        self._set_status(FormStatus.LOADING)
        try:
            try:
                configuration = await self.configuration_loader.load(country_code)
            except ConfigurationError as e:
                logger.warning("Could not load form configuration for %s: %s", country_code, e)
                self._set_field_states([])
                self._set_status(FormStatus.IDLE)
                return

            behavior = self.behavior_registry.behavior_for(country_code)
            prefilled_data = await self._load_prefilled_data(behavior, country_code)
            definitions = behavior.apply(list(configuration.fields), prefilled_data)

            prefilled_data = prefilled_data or {}
            self._set_field_states(
                [FieldState(d, prefilled_data.get(d.id)) for d in definitions]
            )
            self._set_status(FormStatus.READY)
            logger.debug("Loaded %d fields for %s", len(definitions), country_code)
        finally:
            self._set_loading(False)

    def submit(self) -> None:
        """Validate every field and, if all pass, publish the payload.

        Every field is validated even after an earlier one fails, so all
        errors are visible at once. Read-only fields are left out of the
        payload, as are fields without a value.
        """
        if self._status != FormStatus.READY:
            logger.debug("Ignoring submit in status %s", self._status.value)
            return

        self._set_status(FormStatus.SUBMITTING)
        results = [state.validate() for state in self._field_states]

        if not all(results):
            logger.debug("Submit rejected: %d invalid field(s)", results.count(False))
            self._set_status(FormStatus.READY)
            return

        payload: FormData = {}
        for state in self._field_states:
            if state.read_only:
                continue
            value = state.typed_value()
            if value is not None:
                payload[state.id] = value

        self._submission = payload
        self._set_status(FormStatus.SUBMITTED)
        self._emit("submission", dict(payload))

        callbacks, self._completion_callbacks = self._completion_callbacks, []
        for callback in callbacks:
            callback(dict(payload))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _load_prefilled_data(
        self, behavior: CountryBehavior, country_code: str
    ) -> FormData | None:
        loader = behavior.prefilled_data_loader()
        if loader is None:
            return None
        try:
            return await loader.load()
        except PrefilledDataError as e:
            logger.warning("Pre-fill for %s failed, continuing without it: %s", country_code, e)
            return None

    def _emit(self, name: str, value: Any) -> None:
        event = FormEvent(name=name, value=value)
        for listener in list(self._listeners):
            listener(event)

    def _set_field_states(self, states: list[FieldState]) -> None:
        for state in self._field_states:
            state.bind(None)
        for state in states:
            state.bind(self._on_field_changed)
        self._field_states = states
        self._emit("field_states", list(states))

    def _on_field_changed(self, state: FieldState) -> None:
        self._emit("field", state)

    def _set_loading(self, value: bool) -> None:
        if self._is_loading != value:
            self._is_loading = value
            self._emit("is_loading", value)

    def _set_status(self, status: FormStatus) -> None:
        if self._status != status:
            self._status = status
            self._emit("status", status)

    def _set_selected_country_code(self, code: str) -> None:
        code = code.upper()
        if self._selected_country_code != code:
            self._selected_country_code = code
            self._emit("selected_country_code", code)


def _log_load_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error("Scheduled form load failed: %s", error, exc_info=error)


def make_form_controller(
    settings: FormSettings | None = None,
    on_complete: CompletionCallback | None = None,
) -> FormController:
    """Wire a controller with the YAML loader and the built-in behaviors."""
    settings = settings or FormSettings.from_env()
    controller = FormController(
        configuration_loader=YamlConfigurationLoader(settings.config_path),
        behavior_registry=BehaviorRegistry.with_builtins(settings),
        default_country_code=settings.default_country,
    )
    if on_complete is not None:
        controller.on_complete(on_complete)
    return controller
