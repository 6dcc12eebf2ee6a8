"""이미지 처리 함수 / 파이프라인 단위 테스트."""

import io

from PIL import Image

from processor import pipeline
from processor.operations import (
    apply_contrast_in_place,
    apply_contrast_preview,
    encode,
    linear,
    load,
    modulate,
    rotate,
)


def _make_image(width: int = 40, height: int = 20, color=(100, 100, 100)) -> Image.Image:
    """테스트용 단색 이미지를 메모리에서 생성한다."""
    mode = "RGBA" if len(color) == 4 else "RGB"
    return Image.new(mode, (width, height), color=color)


class TestModulate:
    def test_identity(self):
        img = _make_image(color=(120, 60, 200))
        assert modulate(img, 1.0, 1.0).getpixel((0, 0)) == (120, 60, 200)

    def test_zero_brightness_is_black(self):
        img = _make_image(color=(120, 60, 200))
        assert modulate(img, 0, 1.0).getpixel((0, 0)) == (0, 0, 0)

    def test_zero_saturation_is_gray(self):
        r, g, b = modulate(_make_image(color=(200, 30, 30)), 1.0, 0).getpixel((0, 0))
        assert r == g == b

    def test_alpha_is_preserved(self):
        img = _make_image(color=(100, 100, 100, 128))
        r, g, b, a = modulate(img, 0.5, 1.0).getpixel((0, 0))
        assert a == 128
        assert abs(r - 50) <= 1


class TestContrast:
    def test_linear_clamps(self):
        img = _make_image(color=(10, 128, 250))
        assert linear(img, 2.0, -20).getpixel((0, 0)) == (0, 236, 255)

    def test_in_place_neutral_at_100(self):
        img = _make_image(color=(30, 128, 220))
        assert apply_contrast_in_place(img, 100).getpixel((0, 0)) == (30, 128, 220)

    def test_in_place_pivots_around_128(self):
        img = _make_image(color=(100, 128, 200))
        # factor 1.5, offset -64
        assert apply_contrast_in_place(img, 150).getpixel((0, 0)) == (86, 128, 236)

    def test_preview_has_no_offset(self):
        img = _make_image(color=(100, 128, 200))
        assert apply_contrast_preview(img, 150).getpixel((0, 0)) == (150, 192, 255)


class TestRotate:
    def test_rotate_90_swaps_size(self):
        assert rotate(_make_image(40, 20), 90).size == (20, 40)

    def test_rotate_is_clockwise(self):
        img = _make_image(4, 2, color=(0, 0, 0))
        img.putpixel((0, 0), (255, 0, 0))
        result = rotate(img, 90)
        assert result.getpixel((1, 0)) == (255, 0, 0)

    def test_rotate_zero_returns_same_pixels(self):
        img = _make_image(color=(1, 2, 3))
        result = rotate(img, 0)
        assert result is not img
        assert result.size == img.size

    def test_rotate_45_transparent_corners(self):
        result = rotate(_make_image(40, 40, color=(255, 255, 255, 255)), 45)
        assert result.size[0] > 40
        assert result.getpixel((0, 0))[3] == 0


class TestEncodeAndLoad:
    def test_encode_png(self):
        assert encode(_make_image(), "png").startswith(b"\x89PNG\r\n\x1a\n")

    def test_encode_jpeg_drops_alpha(self):
        data = encode(_make_image(color=(1, 2, 3, 4)), "jpeg")
        assert data.startswith(b"\xff\xd8\xff")
        assert Image.open(io.BytesIO(data)).mode == "RGB"

    def test_load_keeps_alpha(self, tmp_path):
        path = tmp_path / "a.png"
        _make_image(color=(1, 2, 3, 4)).save(path)
        assert load(str(path)).mode == "RGBA"

    def test_load_jpeg_as_rgb(self, tmp_path):
        path = tmp_path / "a.jpg"
        _make_image().save(path, "JPEG")
        assert load(str(path)).mode == "RGB"


class TestPipeline:
    def test_contrast_formulas_diverge(self):
        """같은 원본, contrast=150: in-place와 미리보기 결과가 다르다."""
        img = _make_image(color=(100, 100, 100))
        updated = pipeline.transform_for_update(img, contrast=150)
        preview = pipeline.transform_for_preview(img, contrast=150)

        assert updated.getpixel((0, 0)) == (86, 86, 86)
        assert preview.getpixel((0, 0)) == (150, 150, 150)

    def test_update_skips_omitted_steps(self):
        img = _make_image(40, 20, color=(90, 90, 90))
        result = pipeline.transform_for_update(img)
        assert result.size == (40, 20)
        assert result.getpixel((0, 0)) == (90, 90, 90)

    def test_update_zero_brightness_is_applied(self):
        result = pipeline.transform_for_update(_make_image(color=(90, 90, 90)), brightness=0)
        assert result.getpixel((0, 0)) == (0, 0, 0)

    def test_update_order_modulate_then_contrast(self):
        # brightness 50 → 50, 그 다음 contrast 200: 50*2 - 128 = -28 → 0
        img = _make_image(color=(100, 100, 100))
        result = pipeline.transform_for_update(img, brightness=50, contrast=200)
        assert result.getpixel((0, 0)) == (0, 0, 0)

    def test_preview_defaults_are_neutral(self):
        img = _make_image(40, 20, color=(90, 91, 92))
        result = pipeline.transform_for_preview(img)
        assert result.size == (40, 20)
        assert result.getpixel((0, 0)) == (90, 91, 92)

    def test_render_preview_png(self, tmp_path):
        path = tmp_path / "src.png"
        _make_image(40, 20).save(path)
        data = pipeline.render_preview(str(path), "png", rotation=90)

        result = Image.open(io.BytesIO(data))
        assert result.format == "PNG"
        assert result.size == (20, 40)
