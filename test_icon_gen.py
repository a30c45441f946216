from icon_gen import ACCENT, create_icon_image


def test_icon_shape():
    img = create_icon_image(3)
    assert img.size == (64, 64)
    assert img.mode == "RGBA"


def test_icon_draws_count_on_accent():
    img = create_icon_image(12)
    colors = {color for _n, color in img.getcolors(64 * 64)}
    accent = tuple(int(ACCENT[i:i + 2], 16) for i in (1, 3, 5)) + (255,)
    assert img.getpixel((0, 0)) == accent
    # the digits are rendered in (antialiased) white
    assert any(c[0] > 200 and c[1] > 200 and c[2] > 200 for c in colors)


def test_large_counts_are_capped():
    assert create_icon_image(12345).size == (64, 64)
