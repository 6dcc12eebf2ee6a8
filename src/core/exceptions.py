"""앱 전역 커스텀 예외 클래스.

AppException을 상속하면 전역 핸들러(error_handlers.py)가 자동으로
{"error_code": "...", "message": "..."} 형식의 JSON 응답을 생성한다.
"""


class AppException(Exception):
    """앱 전역 베이스 예외.

    서브클래스에서 status_code, error_code, message를 클래스 변수로 정의하면
    전역 핸들러가 해당 값을 읽어 HTTP 응답을 생성한다.
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    message: str = "서버 내부 오류가 발생했습니다"

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


class ValidationFailed(AppException):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    message = "요청 값이 올바르지 않습니다"


# --- 인증 관련 ---


class DuplicateEmail(AppException):
    status_code = 409
    error_code = "DUPLICATE_EMAIL"
    message = "Email already exists."


class DuplicateUsername(AppException):
    status_code = 409
    error_code = "DUPLICATE_USERNAME"
    message = "Username already exists."


class InvalidCredentials(AppException):
    status_code = 401
    error_code = "INVALID_CREDENTIALS"
    message = "이메일 또는 패스워드가 올바르지 않습니다"


class NotAuthenticated(AppException):
    status_code = 401
    error_code = "NOT_AUTHENTICATED"
    message = "로그인이 필요합니다"


class InvalidToken(AppException):
    status_code = 401
    error_code = "INVALID_TOKEN"
    message = "유효하지 않거나 만료된 토큰입니다"


class UserNotFound(AppException):
    status_code = 404
    error_code = "USER_NOT_FOUND"
    message = "사용자를 찾을 수 없습니다"


# --- 이미지 관련 ---


class NoImageUploaded(AppException):
    status_code = 400
    error_code = "NO_IMAGE_UPLOADED"
    message = "업로드된 이미지가 없습니다"


class InvalidFileType(AppException):
    status_code = 400
    error_code = "INVALID_FILE_TYPE"
    message = "JPEG, PNG 이미지만 업로드할 수 있습니다"


class ImageNotFound(AppException):
    status_code = 404
    error_code = "IMAGE_NOT_FOUND"
    message = "이미지를 찾을 수 없습니다"


class ImageFileNotFound(AppException):
    status_code = 404
    error_code = "IMAGE_FILE_NOT_FOUND"
    message = "이미지 파일을 찾을 수 없습니다"


class ImageProcessingFailed(AppException):
    status_code = 500
    error_code = "IMAGE_PROCESSING_FAILED"
    message = "이미지 처리에 실패했습니다"


class TransformQueueFull(AppException):
    status_code = 503
    error_code = "TRANSFORM_QUEUE_FULL"
    message = "처리 대기열이 가득 찼습니다. 잠시 후 다시 시도해주세요"
