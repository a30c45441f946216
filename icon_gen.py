"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from PIL import Image, ImageDraw, ImageFont

ACCENT = "#0078D4"


def _fit_font(draw: ImageDraw.ImageDraw, text: str, size: int):
    """Largest bold font (down to 10pt) whose rendering of *text* fits *size*."""
    font_size = 120
    font = None
    while font_size > 10:
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            try:
                font = ImageFont.truetype("segoeuib.ttf", font_size)
            except OSError:
                return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= size - 8 and bbox[3] - bbox[1] <= size - 8:
            break
        font_size -= 1
    return font


def create_icon_image(count: int) -> Image.Image:
    """Return a 64×64 RGBA image: today's count in white on an accent square."""
    size = 64
    img = Image.new("RGBA", (size, size), ACCENT)
    draw = ImageDraw.Draw(img)

    text = str(count) if count < 1000 else "999+"
    font = _fit_font(draw, text, size)

    # Centre the actual visible pixels (compensate for font metric offsets)
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = (size - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="white", font=font)

    return img
