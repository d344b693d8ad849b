"""Interaction state machine for the infinite slider.

The machine owns three things: the interaction state (a ``SliderState``
variant), the active logical index, and the rendered item list. Gesture and
button events go through ``send``; animation frames arrive from a
``FrameClock``. Both run to completion before anything else is processed, and
subscribers are only notified once an event or frame has been fully applied.

Example:
    clock = ManualFrameClock()
    machine = SliderMachine(projects, clock, window_size=5)
    machine.subscribe(lambda m: render(m.items))

    machine.send(ButtonPress(direction=1))
    clock.run_until_idle()
    assert machine.active_index == 1
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from carousel_slider.core.config import (
    PhysicsConstants,
    SliderSettings,
    effective_window_size,
)
from carousel_slider.core.item_window import (
    KeyFunc,
    SliderItem,
    default_item_key,
    normalize_index,
    wrap_for_slider,
)
from carousel_slider.core.logging import get_logger
from carousel_slider.core.physics import (
    inertia_exhausted,
    inertia_step,
    split_crossings,
    spring_step,
    truncate_toward_zero,
)
from carousel_slider.core.states import (
    ButtonPress,
    Dragging,
    DragMove,
    Idle,
    Inertia,
    PointerDown,
    PointerUp,
    Pressed,
    SliderEvent,
    SliderState,
    Snapping,
    state_loop_handle,
    state_progress,
)
from carousel_slider.core.styles import apply_progress_styles, clamp
from carousel_slider.ports.clock import FrameClock

T = TypeVar("T")

Subscriber = Callable[["SliderMachine[T]"], None]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class SliderMachine(Generic[T]):
    """Drives an infinite carousel from gestures, buttons and frame ticks.

    Args:
        items: The logical item list.
        clock: Frame clock that drives the inertia and snap loops.
        window_size: Requested number of visible items. Overrides
            ``settings.window_size`` when given.
        physics: Loop tuning; defaults to ``PhysicsConstants()``.
        settings: Window and gesture settings; defaults to ``SliderSettings()``.
        key: Identity function for items, see ``default_item_key``.
        name: Optional label bound to every log line of this machine, for
            hosts that drive several sliders.
    """

    def __init__(
        self,
        items: Sequence[T],
        clock: FrameClock,
        window_size: int | None = None,
        physics: PhysicsConstants | None = None,
        settings: SliderSettings | None = None,
        key: KeyFunc = default_item_key,
        name: str | None = None,
    ) -> None:
        self._clock = clock
        self._physics = physics or PhysicsConstants()
        self._settings = settings or SliderSettings()
        self._key = key
        self._source_items: tuple[T, ...] = tuple(items)
        self._requested_window_size = (
            window_size if window_size is not None else self._settings.window_size
        )
        self._active_index = 0
        self._state: SliderState = Idle()
        self._items: tuple[SliderItem[T], ...] = ()
        self._subscribers: list[Subscriber[T]] = []
        self._dirty = False
        self._closed = False
        self._logger = get_logger(__name__)
        if name is not None:
            self._logger = self._logger.bind(slider=name)

        self._rebuild_items(0)
        self._dirty = False

    # --- Read-only views ---

    @property
    def state(self) -> SliderState:
        return self._state

    @property
    def items(self) -> tuple[SliderItem[T], ...]:
        """Rendered items: leading sentinel, visible items, trailing sentinel."""
        return self._items

    @property
    def source_items(self) -> tuple[T, ...]:
        return self._source_items

    @property
    def window_size(self) -> int:
        """Effective number of visible items."""
        return effective_window_size(len(self._source_items), self._requested_window_size)

    @property
    def physics(self) -> PhysicsConstants:
        return self._physics

    @property
    def progress(self) -> float:
        """Sub-slot offset currently displayed."""
        return state_progress(self._state)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def active_index(self) -> int:
        return self._active_index

    @active_index.setter
    def active_index(self, value: int) -> None:
        """Move the selection from outside the machine.

        The index is wrapped into range and the window rebuilt at the
        progress currently on screen, so a running loop keeps animating from
        the new selection.
        """
        index = normalize_index(value, len(self._source_items))
        if index == self._active_index:
            return
        self._logger.debug(
            "slider_index_set_externally",
            previous_index=self._active_index,
            active_index=index,
        )
        self._active_index = index
        self._rebuild_items(self.progress)
        self._flush()

    # --- Inputs ---

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the logical list and rebuild at progress 0."""
        self._source_items = tuple(items)
        self._active_index = normalize_index(self._active_index, len(self._source_items))
        self._logger.debug(
            "slider_items_replaced",
            item_count=len(self._source_items),
            active_index=self._active_index,
        )
        self._rebuild_items(0)
        self._flush()

    def set_window_size(self, window_size: int | None) -> None:
        """Change the requested window size and rebuild at progress 0."""
        self._requested_window_size = window_size
        self._rebuild_items(0)
        self._flush()

    def next(self) -> None:
        self.send(ButtonPress(direction=1))

    def previous(self) -> None:
        self.send(ButtonPress(direction=-1))

    def subscribe(self, callback: Subscriber[T]) -> Callable[[], None]:
        """Call ``callback(machine)`` after every applied event or frame.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def send(self, event: SliderEvent) -> None:
        """Apply one event to the current state.

        Events that have no transition from the current state are ignored.
        """
        if self._closed:
            return

        state = self._state
        if isinstance(state, Idle):
            self._send_idle(event)
        elif isinstance(state, Pressed):
            self._send_pressed(state, event)
        elif isinstance(state, Dragging):
            self._send_dragging(state, event)
        elif isinstance(state, Inertia):
            self._send_inertia(state, event)
        elif isinstance(state, Snapping):
            self._send_snapping(state, event)
        self._flush()

    def close(self) -> None:
        """Cancel any running loop and ignore further input."""
        if self._closed:
            return
        self._stop_animation()
        self._closed = True
        self._set_state(Idle())
        self._subscribers.clear()
        self._dirty = False
        self._logger.debug("slider_closed", active_index=self._active_index)

    def __enter__(self) -> SliderMachine[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Transitions ---

    def _can_interact(self) -> bool:
        return len(self._source_items) >= 2

    def _send_idle(self, event: SliderEvent) -> None:
        if not self._can_interact():
            return
        if isinstance(event, PointerDown):
            self._set_state(Pressed(frozen_progress=0.0))
        elif isinstance(event, ButtonPress):
            impulse = event.direction * self._physics.button_impulse_velocity
            self._start_inertia_loop(impulse, 0.0)

    def _send_pressed(self, state: Pressed, event: SliderEvent) -> None:
        if isinstance(event, DragMove):
            if event.dir_y >= self._settings.off_axis_threshold:
                return
            self._apply_drag(event, base_offset=state.frozen_progress, step_offset=0)
        elif isinstance(event, PointerUp):
            self._start_snap_loop(state.frozen_progress, 0.0)

    def _send_dragging(self, state: Dragging, event: SliderEvent) -> None:
        if isinstance(event, DragMove):
            self._apply_drag(event, base_offset=state.base_offset, step_offset=state.step_offset)
        elif isinstance(event, PointerUp):
            if abs(event.release_velocity) > self._physics.min_inertia_velocity:
                self._start_inertia_loop(event.release_velocity, state.progress)
            else:
                self._start_snap_loop(state.progress, 0.0)

    def _send_inertia(self, state: Inertia, event: SliderEvent) -> None:
        if isinstance(event, PointerDown):
            self._interrupt(state)
        elif isinstance(event, ButtonPress):
            impulse = event.direction * self._physics.button_impulse_velocity
            velocity = clamp(
                state.velocity + impulse,
                -self._physics.max_inertia_velocity,
                self._physics.max_inertia_velocity,
            )
            # The running loop reads the new velocity on its next frame
            self._state = Inertia(
                velocity=velocity,
                progress=state.progress,
                loop_handle=state.loop_handle,
                last_timestamp=state.last_timestamp,
            )
            self._dirty = True

    def _send_snapping(self, state: Snapping, event: SliderEvent) -> None:
        if isinstance(event, PointerDown):
            self._interrupt(state)

    def _interrupt(self, state: Inertia | Snapping) -> None:
        if not self._can_interact():
            return
        self._stop_animation()
        self._set_state(Pressed(frozen_progress=state.progress))

    def _apply_drag(self, event: DragMove, base_offset: float, step_offset: int) -> None:
        if event.pixels_per_step <= 0:
            return
        raw_progress = base_offset - event.movement_x / event.pixels_per_step
        desired_offset = truncate_toward_zero(raw_progress)
        progress = raw_progress - desired_offset
        step_delta = desired_offset - step_offset

        if step_delta != 0:
            self._shift_active_index(step_delta)
            self._rebuild_items(progress)
        else:
            self._update_item_styles(progress)

        self._set_state(
            Dragging(progress=progress, step_offset=desired_offset, base_offset=base_offset)
        )

    # --- Loops ---

    def _request_frame(self, handler: Callable[[int, float], None]) -> int:
        handle = -1

        def on_frame(timestamp: float) -> None:
            handler(handle, timestamp)

        handle = self._clock.request_frame(on_frame)
        return handle

    def _stop_animation(self) -> None:
        handle = state_loop_handle(self._state)
        if handle is not None:
            self._clock.cancel_frame(handle)

    def _start_inertia_loop(self, velocity: float, progress: float) -> None:
        self._stop_animation()
        handle = self._request_frame(self._on_inertia_frame)
        self._set_state(
            Inertia(velocity=velocity, progress=progress, loop_handle=handle)
        )

    def _start_snap_loop(self, progress: float, velocity: float = 0.0) -> None:
        self._stop_animation()
        handle = self._request_frame(self._on_snap_frame)
        self._set_state(
            Snapping(
                velocity=velocity,
                progress=progress,
                target=round_half_up(progress),
                loop_handle=handle,
            )
        )

    def _on_inertia_frame(self, handle: int, timestamp: float) -> None:
        state = self._state
        if self._closed or not isinstance(state, Inertia) or state.loop_handle != handle:
            return

        last = state.last_timestamp if state.last_timestamp is not None else timestamp
        step = inertia_step(state.velocity, state.progress, timestamp - last, self._physics)

        steps, progress = split_crossings(step.progress)
        if steps:
            self._shift_active_index(steps)
            self._rebuild_items(progress)
        else:
            self._update_item_styles(progress)

        if inertia_exhausted(step.velocity, self._physics):
            self._start_snap_loop(progress, step.velocity)
        else:
            next_handle = self._request_frame(self._on_inertia_frame)
            self._set_state(
                Inertia(
                    velocity=step.velocity,
                    progress=progress,
                    loop_handle=next_handle,
                    last_timestamp=timestamp,
                )
            )
        self._flush()

    def _on_snap_frame(self, handle: int, timestamp: float) -> None:
        state = self._state
        if self._closed or not isinstance(state, Snapping) or state.loop_handle != handle:
            return

        last = state.last_timestamp if state.last_timestamp is not None else timestamp
        step = spring_step(
            state.velocity,
            state.progress,
            state.target,
            (timestamp - last) / 1000,
            self._physics,
        )
        self._update_item_styles(step.progress)

        if step.settled:
            self._commit_shift(state.target)
            self._set_state(Idle())
        else:
            next_handle = self._request_frame(self._on_snap_frame)
            self._set_state(
                Snapping(
                    velocity=step.velocity,
                    progress=step.progress,
                    target=state.target,
                    loop_handle=next_handle,
                    last_timestamp=timestamp,
                )
            )
        self._flush()

    # --- Items ---

    def _rebuild_items(self, progress: float) -> None:
        window_size = self.window_size
        rendered = wrap_for_slider(
            self._source_items, self._active_index, window_size, key=self._key
        )
        self._items = tuple(apply_progress_styles(rendered, progress, window_size))
        self._dirty = True

    def _update_item_styles(self, progress: float) -> None:
        self._items = tuple(apply_progress_styles(self._items, progress, self.window_size))
        self._dirty = True

    def _shift_active_index(self, steps: int) -> None:
        count = len(self._source_items)
        if count < 2:
            return
        self._active_index = normalize_index(self._active_index + steps, count)
        self._logger.debug("slider_index_shifted", steps=steps, active_index=self._active_index)

    def _commit_shift(self, progress: float) -> None:
        target = round_half_up(progress)
        if target != 0:
            self._shift_active_index(target)
        self._rebuild_items(0)

    # --- State bookkeeping ---

    def _set_state(self, state: SliderState) -> None:
        previous = self._state
        self._state = state
        self._dirty = True
        if previous.type != state.type:
            self._logger.debug(
                "slider_transition",
                from_state=previous.type,
                to_state=state.type,
                progress=round(state_progress(state), 4),
                active_index=self._active_index,
            )

    def _flush(self) -> None:
        if not self._dirty:
            return
        self._dirty = False
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception:
                self._logger.exception("slider_subscriber_failed", callback=repr(callback))
