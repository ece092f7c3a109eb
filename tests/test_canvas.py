from __future__ import annotations

from heartbeat.canvas import Canvas, Font

RED = (255, 0, 0)


def _lit(canvas: Canvas) -> int:
    buf = canvas.get_buffer()
    return sum(1 for i in range(0, len(buf), 3) if buf[i] or buf[i + 1] or buf[i + 2])


def test_clear_fills_every_pixel():
    canvas = Canvas(4, 3)
    canvas.clear((10, 20, 30))
    assert canvas.get_buffer() == bytes((10, 20, 30)) * 12


def test_negative_size_is_clamped_to_empty():
    canvas = Canvas(-5, 10)
    assert (canvas.width, canvas.height) == (0, 10)
    canvas.clear()
    canvas.fill_rect(0, 0, 3, 3, RED)
    assert canvas.get_buffer() == b""


def test_fill_rect_rounds_to_pixels():
    canvas = Canvas(10, 10)
    canvas.fill_rect(2.4, 3.6, 2.0, 1.0, RED)
    assert canvas.get(2, 4) == RED
    assert canvas.get(3, 4) == RED
    assert canvas.get(4, 4) == (0, 0, 0)
    assert canvas.get(2, 3) == (0, 0, 0)
    assert _lit(canvas) == 2


def test_fill_rect_covers_at_least_one_pixel():
    canvas = Canvas(10, 10)
    canvas.fill_rect(5.1, 5.1, 0.2, 0.2, RED)
    assert _lit(canvas) == 1


def test_fill_rect_clips_and_ignores_non_finite():
    canvas = Canvas(10, 10)
    canvas.fill_rect(-3, -3, 5, 5, RED)
    assert _lit(canvas) == 4
    canvas.fill_rect(50, 50, 5, 5, RED)
    canvas.fill_rect(float("nan"), 1, 2, 2, RED)
    canvas.fill_rect(1, float("inf"), 2, 2, RED)
    assert _lit(canvas) == 4


def test_save_restore_round_trips_transform_and_style():
    canvas = Canvas(100, 100)
    canvas.save()
    canvas.translate(50, 40)
    canvas.scale(2)
    canvas.shadow_blur = 15
    canvas.fill_style = (1, 2, 3, 0.5)
    assert canvas.to_device(5, 5) == (60, 50)
    canvas.restore()
    assert canvas.to_device(5, 5) == (5, 5)
    assert canvas.shadow_blur == 0.0
    assert canvas.fill_style == (0, 0, 0, 1.0)


def test_restore_without_save_is_ignored():
    canvas = Canvas(10, 10)
    canvas.translate(3, 3)
    canvas.restore()
    assert canvas.to_device(0, 0) == (3, 3)


def _text_canvas(**style) -> Canvas:
    canvas = Canvas(200, 100)
    canvas.font = Font(40, ("DejaVuSans-Bold.ttf",))
    canvas.text_align = "center"
    canvas.text_baseline = "middle"
    canvas.fill_style = (255, 255, 255, 1.0)
    for name, value in style.items():
        setattr(canvas, name, value)
    return canvas


def test_fill_text_draws_around_anchor():
    canvas = _text_canvas()
    canvas.fill_text("HI", 100, 50)
    assert _lit(canvas) > 0
    assert canvas.get(0, 0) == (0, 0, 0)
    assert canvas.get(199, 99) == (0, 0, 0)


def test_fill_text_alpha_blends():
    opaque = _text_canvas()
    faint = _text_canvas(fill_style=(255, 255, 255, 0.1))
    opaque.fill_text("HI", 100, 50)
    faint.fill_text("HI", 100, 50)
    assert max(faint.get_buffer()) < max(opaque.get_buffer())
    assert max(faint.get_buffer()) <= 26


def test_transparent_text_is_a_no_op():
    canvas = _text_canvas(fill_style=(255, 255, 255, 0.0))
    canvas.fill_text("HI", 100, 50)
    assert _lit(canvas) == 0


def test_shadow_glow_spreads_beyond_sharp_text():
    sharp = _text_canvas()
    glowing = _text_canvas(shadow_color=(255, 0, 0, 0.8), shadow_blur=20)
    sharp.fill_text("HI", 100, 50)
    glowing.fill_text("HI", 100, 50)
    assert _lit(glowing) > _lit(sharp)


def test_scale_transform_grows_text():
    small = _text_canvas()
    large = _text_canvas()
    small.fill_text("HI", 100, 50)
    large.translate(100, 50)
    large.scale(1.5)
    large.fill_text("HI", 0, 0)
    assert _lit(large) > _lit(small)


def test_letter_spacing_widens_text():
    canvas = _text_canvas()
    plain = canvas.measure_text("HEART")
    canvas.letter_spacing = 3
    assert canvas.measure_text("HEART") == plain + 12


def test_tracked_text_is_centered_on_anchor():
    canvas = _text_canvas(letter_spacing=6)
    canvas.fill_text("HHHH", 100, 50)
    cols = [x for x in range(canvas.width) for y in range(canvas.height) if canvas.get(x, y) != (0, 0, 0)]
    assert cols
    assert abs((min(cols) + max(cols)) / 2 - 100) <= 3
