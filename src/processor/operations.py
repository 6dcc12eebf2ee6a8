"""
순수 CPU-bound 이미지 처리 함수.
모든 변환 함수는 PIL.Image를 받아서 PIL.Image를 반환한다.
RGBA 이미지는 RGB 채널만 조정하고 알파 채널은 보존한다.
"""

import io
from collections.abc import Callable

from PIL import Image, ImageEnhance

CONTRAST_NEUTRAL = 100


def load(path: str) -> Image.Image:
    """파일을 완전히 읽어 RGB(투명도가 있으면 RGBA) 이미지로 반환한다.

    load() 후 파일 핸들을 닫으므로 같은 경로에 바로 덮어써도 된다.
    """
    with Image.open(path) as img:
        img.load()
        has_alpha = img.mode in ("RGBA", "LA") or (
            img.mode == "P" and "transparency" in img.info
        )
        return img.convert("RGBA" if has_alpha else "RGB")


def _on_rgb(image: Image.Image, func: Callable[[Image.Image], Image.Image]) -> Image.Image:
    if image.mode != "RGBA":
        return func(image)
    alpha = image.getchannel("A")
    result = func(image.convert("RGB"))
    result.putalpha(alpha)
    return result


def modulate(image: Image.Image, brightness: float = 1.0, saturation: float = 1.0) -> Image.Image:
    """밝기/채도를 배율로 조정한다. 1.0이면 원본 그대로."""

    def _apply(rgb: Image.Image) -> Image.Image:
        out = ImageEnhance.Brightness(rgb).enhance(brightness)
        return ImageEnhance.Color(out).enhance(saturation)

    return _on_rgb(image, _apply)


def linear(image: Image.Image, factor: float, offset: float = 0.0) -> Image.Image:
    """채널별 선형 변환: output = input * factor + offset (0~255로 clamp)."""
    lut = [max(0, min(255, round(v * factor + offset))) for v in range(256)]
    return _on_rgb(image, lambda rgb: rgb.point(lut * len(rgb.getbands())))


def apply_contrast_in_place(image: Image.Image, contrast: float) -> Image.Image:
    # 중간값 128을 기준으로 늘린다. contrast=100이면 변화 없음.
    factor = contrast / 100
    return linear(image, factor, -(128 * (factor - 1)))


def apply_contrast_preview(image: Image.Image, contrast: float) -> Image.Image:
    # 다운로드 경로: offset이 0으로 고정되어 in-place 결과와 다르다.
    return linear(image, contrast / 100, 0)


def rotate(image: Image.Image, degrees: float = 90) -> Image.Image:
    """시계 방향으로 회전한다. 캔버스는 회전 결과에 맞게 늘어난다."""
    if degrees % 360 == 0:
        return image.copy()
    return image.rotate(-degrees, expand=True)


def encode(image: Image.Image, fmt: str, quality: int = 80) -> bytes:
    """jpeg/png로 인코딩한 바이트를 반환한다. JPEG는 알파 채널을 버린다."""
    buf = io.BytesIO()
    if fmt == "png":
        image.save(buf, "PNG")
    else:
        if image.mode != "RGB":
            image = image.convert("RGB")
        image.save(buf, "JPEG", quality=quality)
    return buf.getvalue()
