"""Circular windowing of the item list.

Maps an arbitrary-length list onto a fixed-size visible window plus two
invisible sentinel items. The sentinels stand for the neighbours just outside
the window, so sliding by one slot can fade one in while the other fades out
and the list appears to wrap forever.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from carousel_slider.core.styles import NumericStyle

T = TypeVar("T")

KeyFunc = Callable[[Any, int], str]


def default_item_key(item: Any, index: int) -> str:
    """Return the identity of ``item`` as a string.

    Mappings are read through their ``"id"`` key, other objects through an
    ``id`` attribute. Items without a usable id fall back to their position in
    the logical list.
    """
    if isinstance(item, Mapping):
        item_id = item.get("id")
    else:
        item_id = getattr(item, "id", None)
    if item_id is None or item_id == "":
        return f"index-{index}"
    return str(item_id)


@dataclass
class SliderItem(Generic[T]):
    """An item as rendered by the slider.

    Attributes:
        item: The underlying item, untouched.
        key: Display identity, unique within one window build.
        original_index: Position of the item in the logical list.
        style: Visual parameters for the current progress.
    """

    item: T
    key: str
    original_index: int
    style: NumericStyle = field(default_factory=NumericStyle)

    @property
    def is_sentinel(self) -> bool:
        return not self.key.startswith("visible-")


def normalize_index(index: int, length: int) -> int:
    """Wrap ``index`` into ``[0, length)``; negative indices count from the end."""
    if length <= 0:
        return 0
    return index % length


def get_visible_items(
    items: Sequence[T], active_index: int, window_size: int
) -> list[tuple[int, T]]:
    """Slice ``window_size`` items starting at ``active_index``, wrapping around.

    Returns:
        (original_index, item) pairs in display order.
    """
    if not items:
        return []

    length = len(items)
    start = normalize_index(active_index, length)
    count = max(min(window_size, length), 0)

    head = min(count, length - start)
    visible = [(start + offset, items[start + offset]) for offset in range(head)]
    if len(visible) < count:
        visible.extend((index, items[index]) for index in range(count - len(visible)))
    return visible


def wrap_for_slider(
    items: Sequence[T],
    active_index: int,
    window_size: int,
    key: KeyFunc = default_item_key,
) -> list[SliderItem[T]]:
    """Build the rendered item list: ``[first_sentinel, *visible, last_sentinel]``.

    When the list is larger than the window the sentinels are the items just
    before and after the window. When it fits entirely, the first sentinel
    mirrors the last visible item and the last sentinel mirrors the first, so a
    single cycle loops seamlessly.

    Args:
        items: The full logical list.
        active_index: Index of the frontmost item; wrapped into range.
        window_size: Number of visible items.
        key: Function returning an item's identity from (item, original_index).

    Returns:
        The rendered items, or an empty list when nothing can be shown.
    """
    visible = get_visible_items(items, active_index, window_size)
    if not visible:
        return []

    length = len(items)
    first_visible = visible[0][0]
    last_visible = visible[-1][0]

    if length > window_size:
        first_sentinel = first_visible - 1 if first_visible > 0 else length - 1
        last_sentinel = last_visible + 1 if last_visible < length - 1 else 0
    else:
        first_sentinel = last_visible
        last_sentinel = first_visible

    if not (0 <= first_sentinel < length and 0 <= last_sentinel < length):
        return []

    first_item = items[first_sentinel]
    last_item = items[last_sentinel]

    rendered: list[SliderItem[T]] = [
        SliderItem(
            item=first_item,
            key=f"first-invisible-{key(first_item, first_sentinel)}",
            original_index=first_sentinel,
        )
    ]
    rendered.extend(
        SliderItem(
            item=item,
            key=f"visible-{key(item, index)}-{position}",
            original_index=index,
        )
        for position, (index, item) in enumerate(visible)
    )
    rendered.append(
        SliderItem(
            item=last_item,
            key=f"last-invisible-{key(last_item, last_sentinel)}",
            original_index=last_sentinel,
        )
    )
    return rendered
