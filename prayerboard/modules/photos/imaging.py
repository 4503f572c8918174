"""Photo resizing before upload and server-side crop rendering."""

import io
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from prayerboard.config import settings
from prayerboard.modules.photos.position import background_layout, crop_box
from prayerboard.modules.photos.schemas import PhotoPosition

BACKGROUND_COLOR = (243, 244, 246)  # #f3f4f6, the preview container color


def _open_rgb(image_bytes: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Unsupported image: {e}")
    if img.mode != "RGB":
        img = img.convert("RGB")
    return img


def _to_jpeg(img: Image.Image, quality: int) -> bytes:
    out = io.BytesIO()
    img.save(out, format="JPEG", quality=quality, optimize=True)
    return out.getvalue()


def resize_for_upload(
    image_bytes: bytes,
    max_side: Optional[int] = None,
    quality: Optional[int] = None,
) -> bytes:
    """Shrink so the longest side is at most `max_side`, keeping the aspect ratio. Returns JPEG bytes."""
    max_side = max_side or settings.photo_max_side
    quality = quality or settings.photo_jpeg_quality
    img = _open_rgb(image_bytes)
    w, h = img.size
    if w > max_side or h > max_side:
        if w > h:
            new_size = (max_side, max(1, round(h / w * max_side)))
        else:
            new_size = (max(1, round(w / h * max_side)), max_side)
        img = img.resize(new_size, Image.Resampling.LANCZOS)
    return _to_jpeg(img, quality)


def render_thumbnail(
    image_bytes: bytes,
    position: Optional[PhotoPosition],
    size: Optional[int] = None,
    quality: Optional[int] = None,
) -> bytes:
    """Square JPEG showing exactly what the browser shows for `position`."""
    size = size or settings.thumbnail_size
    quality = quality or settings.photo_jpeg_quality
    img = _open_rgb(image_bytes)
    container = (float(size), float(size))
    layout = background_layout(position, img.size, container)
    left, top, right, bottom = crop_box(position, img.size, container)

    canvas = Image.new("RGB", (size, size), BACKGROUND_COLOR)
    scale = layout.width / img.size[0]
    dest_w = max(1, round((right - left) * scale))
    dest_h = max(1, round((bottom - top) * scale))
    region = img.crop((round(left), round(top), round(right), round(bottom)))
    region = region.resize((dest_w, dest_h), Image.Resampling.LANCZOS)
    canvas.paste(region, (round(max(0.0, layout.offset_x)), round(max(0.0, layout.offset_y))))
    return _to_jpeg(canvas, quality)
