"""변환 파이프라인.

in-place 업데이트와 다운로드 미리보기는 적용 순서와 contrast 공식이 다르다.

    update  : modulate → contrast(in-place) → rotate → encode
    preview : rotate → modulate → contrast(preview, 100이 아닐 때만) → encode

호출자는 0~100 스케일 값을 넘기고, 여기서 배율(/100)로 변환한다.
"""

from PIL import Image

from processor import operations


def _scale(value: float | None) -> float:
    return 1.0 if value is None else value / 100


def transform_for_update(
    image: Image.Image,
    brightness: float | None = None,
    contrast: float | None = None,
    saturation: float | None = None,
    rotation: float | None = None,
) -> Image.Image:
    """None인 값은 "지정 안 함"으로 취급해 해당 단계를 건너뛴다. 0은 유효한 값이다."""
    result = operations.modulate(image, _scale(brightness), _scale(saturation))
    if contrast is not None:
        result = operations.apply_contrast_in_place(result, contrast)
    if rotation is not None:
        result = operations.rotate(result, rotation)
    return result


def transform_for_preview(
    image: Image.Image,
    brightness: float = 100,
    contrast: float = 100,
    saturation: float = 100,
    rotation: float = 0,
) -> Image.Image:
    result = operations.rotate(image, rotation)
    result = operations.modulate(result, brightness / 100, saturation / 100)
    if contrast != operations.CONTRAST_NEUTRAL:
        result = operations.apply_contrast_preview(result, contrast)
    return result


def render_update(
    source_path: str,
    fmt: str,
    brightness: float | None = None,
    contrast: float | None = None,
    saturation: float | None = None,
    rotation: float | None = None,
    quality: int = 80,
) -> bytes:
    """저장된 파일을 읽어 in-place 업데이트 결과를 인코딩된 바이트로 반환한다."""
    image = operations.load(source_path)
    result = transform_for_update(image, brightness, contrast, saturation, rotation)
    return operations.encode(result, fmt, quality)


def render_preview(
    source_path: str,
    fmt: str,
    brightness: float = 100,
    contrast: float = 100,
    saturation: float = 100,
    rotation: float = 0,
    quality: int = 80,
) -> bytes:
    image = operations.load(source_path)
    result = transform_for_preview(image, brightness, contrast, saturation, rotation)
    return operations.encode(result, fmt, quality)
