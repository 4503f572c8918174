"""
Photo crop position editing.

A photo is shown as a CSS background image inside a square container:
``background-size: {zoom * 100}%`` and ``background-position: {x}% {y}%``.
The editor turns pointer input into that ``{x, y, zoom}`` triple, and the
layout helpers map the triple back to the region of the source image that
ends up visible, so the same crop can be reproduced anywhere.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from prayerboard.modules.photos.schemas import (
    PhotoPosition, DEFAULT_X, DEFAULT_Y, MIN_ZOOM, MAX_ZOOM, ZOOM_STEP
)

PAN_MODE = "pan"
POINT_MODE = "point"
NUDGE_STEP = 5


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


@dataclass(frozen=True)
class Box:
    """Bounding box of the preview container in client pixels."""
    left: float
    top: float
    width: float
    height: float

    @property
    def is_measurable(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class DragSession:
    start_pointer: Tuple[float, float]
    start_x: float
    start_y: float
    box: Box


def position_from_pointer(pointer_x: float, pointer_y: float, box: Box) -> Tuple[float, float]:
    """Click/drag-to-position: the pointer itself becomes the focal point."""
    x = clamp((pointer_x - box.left) / box.width * 100)
    y = clamp((pointer_y - box.top) / box.height * 100)
    return x, y


def pan_position(
    start_x: float,
    start_y: float,
    start_pointer: Tuple[float, float],
    pointer: Tuple[float, float],
    box: Box,
) -> Tuple[float, float]:
    """Pan-by-delta: dragging the image right moves the focal point left."""
    sensitivity = 100 / box.width * 2
    dx = pointer[0] - start_pointer[0]
    dy = pointer[1] - start_pointer[1]
    x = clamp(start_x - dx * sensitivity)
    y = clamp(start_y - dy * sensitivity)
    return _round_half_up(x), _round_half_up(y)


def snap_zoom(value: float) -> float:
    value = clamp(value, MIN_ZOOM, MAX_ZOOM)
    return round(math.floor(value / ZOOM_STEP + 0.5) * ZOOM_STEP, 1)


def nudge(position: PhotoPosition, dx: float, dy: float) -> PhotoPosition:
    return position.model_copy(update={
        "x": clamp(position.x + dx),
        "y": clamp(position.y + dy),
    })


def normalize_position(position: Optional[PhotoPosition]) -> PhotoPosition:
    """Clamp a position coming from a client; missing means centered, unzoomed."""
    if position is None:
        return PhotoPosition()
    return PhotoPosition(
        x=clamp(position.x),
        y=clamp(position.y),
        zoom=snap_zoom(position.zoom or MIN_ZOOM),
    )


def _number(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(number) else number


def position_from_record(record: Any) -> PhotoPosition:
    """Read a stored position leniently.

    Legacy rows may lack coordinates or hold out-of-range values; missing or
    unreadable fields fall back to the defaults and the rest are clamped.
    """
    if isinstance(record, PhotoPosition):
        return normalize_position(record)
    if not isinstance(record, dict):
        return PhotoPosition()
    return PhotoPosition(
        x=clamp(_number(record.get("x"), DEFAULT_X)),
        y=clamp(_number(record.get("y"), DEFAULT_Y)),
        zoom=snap_zoom(_number(record.get("zoom"), MIN_ZOOM)),
    )


class PhotoEditor:
    """Two-phase editor: pointer and zoom input mutate a temporary position,
    which replaces the confirmed one only on `confirm()`."""

    def __init__(self, confirmed: Optional[PhotoPosition] = None, mode: str = PAN_MODE):
        if mode not in (PAN_MODE, POINT_MODE):
            raise ValueError(f"Unknown editor mode: {mode}")
        self.mode = mode
        self.confirmed = normalize_position(confirmed)
        self.temp = self.confirmed.model_copy()
        self.is_open = False
        self._drag: Optional[DragSession] = None

    @property
    def dragging(self) -> bool:
        return self._drag is not None

    def open(self) -> PhotoPosition:
        self.temp = self.confirmed.model_copy()
        self.is_open = True
        return self.temp

    def open_new_upload(self) -> PhotoPosition:
        self.temp = PhotoPosition()
        self.is_open = True
        return self.temp

    def press(self, pointer_x: float, pointer_y: float, box: Optional[Box]) -> Optional[DragSession]:
        # Container not mounted yet
        if box is None or not box.is_measurable:
            return None
        self._drag = DragSession(
            start_pointer=(pointer_x, pointer_y),
            start_x=self.temp.x,
            start_y=self.temp.y,
            box=box,
        )
        if self.mode == POINT_MODE:
            self._move_to(pointer_x, pointer_y)
        return self._drag

    def move(self, pointer_x: float, pointer_y: float) -> PhotoPosition:
        if self._drag is not None:
            self._move_to(pointer_x, pointer_y)
        return self.temp

    def release(self) -> None:
        self._drag = None

    def _move_to(self, pointer_x: float, pointer_y: float) -> None:
        drag = self._drag
        if self.mode == POINT_MODE:
            x, y = position_from_pointer(pointer_x, pointer_y, drag.box)
        else:
            x, y = pan_position(drag.start_x, drag.start_y, drag.start_pointer, (pointer_x, pointer_y), drag.box)
        self.temp = self.temp.model_copy(update={"x": x, "y": y})

    def set_zoom(self, value: float) -> PhotoPosition:
        self.temp = self.temp.model_copy(update={"zoom": snap_zoom(value)})
        return self.temp

    def nudge(self, dx: float, dy: float) -> PhotoPosition:
        self.temp = nudge(self.temp, dx, dy)
        return self.temp

    def confirm(self) -> PhotoPosition:
        self.release()
        self.confirmed = self.temp.model_copy()
        self.is_open = False
        return self.confirmed

    def cancel(self) -> PhotoPosition:
        self.release()
        self.temp = self.confirmed.model_copy()
        self.is_open = False
        return self.confirmed


def _fmt(value: float) -> str:
    return f"{value:g}"


def background_style(position: Optional[PhotoPosition]) -> Dict[str, str]:
    position = position or PhotoPosition()
    zoom = position.zoom or MIN_ZOOM
    return {
        "background-position": f"{_fmt(position.x)}% {_fmt(position.y)}%",
        "background-size": f"{_fmt(round(zoom * 100, 6))}%",
        "background-repeat": "no-repeat",
    }


@dataclass(frozen=True)
class BackgroundLayout:
    """Rendered image size and its offset from the container's top-left corner."""
    width: float
    height: float
    offset_x: float
    offset_y: float


def background_layout(
    position: Optional[PhotoPosition],
    image_size: Tuple[int, int],
    container_size: Tuple[float, float],
) -> BackgroundLayout:
    position = position or PhotoPosition()
    zoom = position.zoom or MIN_ZOOM
    image_w, image_h = image_size
    container_w, container_h = container_size
    width = zoom * container_w
    height = width * image_h / image_w
    # CSS percentages align the same point of image and container
    offset_x = (container_w - width) * position.x / 100
    offset_y = (container_h - height) * position.y / 100
    return BackgroundLayout(width, height, offset_x, offset_y)


def crop_box(
    position: Optional[PhotoPosition],
    image_size: Tuple[int, int],
    container_size: Tuple[float, float] = (1.0, 1.0),
) -> Tuple[float, float, float, float]:
    """Region (left, top, right, bottom) of the source image visible in the container."""
    image_w, image_h = image_size
    container_w, container_h = container_size
    layout = background_layout(position, image_size, container_size)
    scale = image_w / layout.width
    left = clamp(-layout.offset_x * scale, 0, image_w)
    top = clamp(-layout.offset_y * scale, 0, image_h)
    right = clamp((container_w - layout.offset_x) * scale, 0, image_w)
    bottom = clamp((container_h - layout.offset_y) * scale, 0, image_h)
    return left, top, right, bottom


def normalized_crop_box(
    position: Optional[PhotoPosition],
    image_size: Tuple[int, int],
    container_size: Tuple[float, float] = (1.0, 1.0),
) -> Tuple[float, float, float, float]:
    image_w, image_h = image_size
    left, top, right, bottom = crop_box(position, image_size, container_size)
    return left / image_w, top / image_h, right / image_w, bottom / image_h
