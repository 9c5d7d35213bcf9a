"""Binary Detector Unit Tests.

BinaryDetector 2단계 탐지(경로 생성 → 경로 검증) 단위 테스트입니다.
"""

import errno
import os
import sys

import pytest

from config.constants import PathGenerationErrorType, PathValidationErrorType
from domain.models.binary_detection import (
    BinaryDetectionOptions,
    PathGenerationError,
    PathGenerationResult,
)
from infrastructure.binary_detector import BinaryDetector, StaticPathGenerator

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="POSIX permission bits required"
)


def _options(root) -> BinaryDetectionOptions:
    return BinaryDetectionOptions(project_root=str(root))


class TestPathValidation:
    """경로 검증 단계 테스트."""

    @posix_only
    @pytest.mark.asyncio
    async def test_short_circuits_at_first_executable(
        self, project_root, write_file, make_executable, fake_logger
    ):
        """[TC-BIN-001] 단락 평가 - 첫 번째 실행 파일에서 탐색을 멈춘다.

        테스트 목적:
            후보 A(없음), B(실행 불가), C(실행 가능), D(실행 가능) 순서에서
            C가 선택되고 D는 검사하지 않는지 확인한다.

        테스트 시나리오:
            Given: A는 존재하지 않고 B는 0o644 파일, C와 D는 실행 파일이며
            When: detect_binary_path를 호출하면
            Then: binary_path는 C, 시도 기록은 A/B/C 3건이며 D는 포함되지 않는다

        Notes:
            없음
        """
        # Given
        a = project_root / "A"
        b = write_file("B", "data", mode=0o644)
        c = make_executable("C")
        d = make_executable("D")
        paths = [str(a), str(b), str(c), str(d)]
        detector = BinaryDetector(StaticPathGenerator(paths), logger=fake_logger)

        # When
        result = await detector.detect_binary_path(_options(project_root))

        # Then
        assert result.success is True
        assert result.binary_path == str(c)
        attempts = result.path_validation.attempts
        assert [attempt.path for attempt in attempts] == [str(a), str(b), str(c)]
        assert attempts[0].error.type == PathValidationErrorType.FILE_NOT_FOUND
        assert attempts[1].error.type == PathValidationErrorType.NOT_EXECUTABLE
        assert attempts[2].error is None

    @posix_only
    @pytest.mark.asyncio
    async def test_attempts_length_equals_first_success_index(
        self, project_root, make_executable, fake_logger
    ):
        """[TC-BIN-002] 시도 횟수 - 첫 성공 위치 + 1과 같다.

        테스트 목적:
            성공 시 attempts 길이가 첫 성공 후보의 인덱스 + 1인지 검증한다.

        테스트 시나리오:
            Given: 존재하지 않는 후보 2개 뒤에 실행 파일 1개가 있고
            When: validate_binary_paths를 호출하면
            Then: attempts는 3건이고 마지막 시도만 에러가 없다

        Notes:
            없음
        """
        # Given
        exe = make_executable("bin/app")
        paths = [str(project_root / "x"), str(project_root / "y"), str(exe)]
        detector = BinaryDetector(logger=fake_logger)

        # When
        result = await detector.validate_binary_paths(paths)

        # Then
        assert result.success is True
        assert len(result.attempts) == 3
        assert [a.succeeded for a in result.attempts] == [False, False, True]
        assert len(result.failed_attempts) == 2

    @pytest.mark.asyncio
    async def test_directory_is_rejected(self, project_root, fake_logger):
        """[TC-BIN-003] 디렉터리 후보 - IS_DIRECTORY로 분류된다.

        테스트 목적:
            디렉터리 경로는 실행 권한과 무관하게 거부되는지 확인한다.

        테스트 시나리오:
            Given: 후보 경로가 디렉터리이고
            When: validate_binary_paths를 호출하면
            Then: 실패 결과와 IS_DIRECTORY 에러가 기록된다

        Notes:
            없음
        """
        # Given
        directory = project_root / "dist"
        directory.mkdir()
        detector = BinaryDetector(logger=fake_logger)

        # When
        result = await detector.validate_binary_paths([str(directory)])

        # Then
        assert result.success is False
        assert result.valid_path is None
        assert result.attempts[0].error.type == PathValidationErrorType.IS_DIRECTORY

    @pytest.mark.asyncio
    async def test_permission_denied_is_categorized(
        self, project_root, fake_logger, monkeypatch
    ):
        """[TC-BIN-004] 권한 오류 - PERMISSION_DENIED로 분류된다.

        테스트 목적:
            stat 단계에서 EACCES가 발생하면 PERMISSION_DENIED로 기록되는지 확인한다.

        테스트 시나리오:
            Given: 특정 경로에 대해 os.stat이 PermissionError를 발생시키고
            When: validate_binary_paths를 호출하면
            Then: 해당 시도는 PERMISSION_DENIED 에러를 가진다

        Notes:
            root 권한 환경에서도 재현되도록 monkeypatch를 사용한다.
        """
        # Given
        target = str(project_root / "locked" / "app")
        real_stat = os.stat

        def fake_stat(path, *args, **kwargs):
            if os.fspath(path) == target:
                raise PermissionError(errno.EACCES, "Permission denied", target)
            return real_stat(path, *args, **kwargs)

        monkeypatch.setattr(os, "stat", fake_stat)
        detector = BinaryDetector(logger=fake_logger)

        # When
        result = await detector.validate_binary_paths([target])

        # Then
        assert result.success is False
        error = result.attempts[0].error
        assert error.type == PathValidationErrorType.PERMISSION_DENIED
        assert error.message == "Permission denied"

    @posix_only
    @pytest.mark.asyncio
    async def test_custom_validation_rejection_continues(
        self, make_executable, fake_logger
    ):
        """[TC-BIN-005] 사용자 정의 검증 - 거부 후 다음 후보를 검사한다.

        테스트 목적:
            custom_validation이 False를 반환하면 후보가 거부되고 탐색이 계속되는지 검증한다.

        테스트 시나리오:
            Given: 첫 번째 실행 파일을 거부하는 하위 클래스와 실행 파일 2개가 있고
            When: validate_binary_paths를 호출하면
            Then: 두 번째 파일이 선택되고 첫 시도는 NOT_EXECUTABLE로 기록된다

        Notes:
            없음
        """
        # Given
        first = make_executable("first")
        second = make_executable("second")

        class RejectingDetector(BinaryDetector):
            async def custom_validation(self, path: str) -> bool:
                return path != str(first)

        detector = RejectingDetector(logger=fake_logger)

        # When
        result = await detector.validate_binary_paths([str(first), str(second)])

        # Then
        assert result.valid_path == str(second)
        assert result.attempts[0].error.type == PathValidationErrorType.NOT_EXECUTABLE
        assert "framework-specific" in result.attempts[0].error.message


class TestCategorizeValidationError:
    """OS 에러 분류 테스트."""

    @pytest.mark.parametrize(
        "error, expected",
        [
            (FileNotFoundError(errno.ENOENT, "No such file"), PathValidationErrorType.FILE_NOT_FOUND),
            (NotADirectoryError(errno.ENOTDIR, "Not a directory"), PathValidationErrorType.FILE_NOT_FOUND),
            (PermissionError(errno.EPERM, "Operation not permitted"), PathValidationErrorType.PERMISSION_DENIED),
            (IsADirectoryError(errno.EISDIR, "Is a directory"), PathValidationErrorType.IS_DIRECTORY),
        ],
    )
    def test_known_errors(self, error, expected):
        """[TC-BIN-006] 알려진 OS 에러 - 정해진 분류로 매핑된다.

        테스트 목적:
            errno별 OSError가 올바른 검증 에러 타입으로 변환되는지 확인한다.

        테스트 시나리오:
            Given: errno가 설정된 OSError가 있고
            When: categorize_validation_error를 호출하면
            Then: 기대한 타입과 기본 메시지를 반환한다

        Notes:
            없음
        """
        # When
        result = BinaryDetector.categorize_validation_error(error)

        # Then
        assert result.type == expected
        assert result.message == expected.default_message

    def test_unknown_error_keeps_os_message(self):
        """[TC-BIN-007] 알 수 없는 OS 에러 - 메시지를 보존한다.

        테스트 목적:
            분류되지 않는 errno는 FILE_NOT_FOUND로 기록되되 OS 메시지를 유지하는지 확인한다.

        테스트 시나리오:
            Given: ELOOP errno의 OSError가 있고
            When: categorize_validation_error를 호출하면
            Then: FILE_NOT_FOUND 타입과 OS 메시지를 반환한다

        Notes:
            없음
        """
        # Given
        error = OSError(errno.ELOOP, "Too many levels of symbolic links")

        # When
        result = BinaryDetector.categorize_validation_error(error)

        # Then
        assert result.type == PathValidationErrorType.FILE_NOT_FOUND
        assert result.message == "Too many levels of symbolic links"

    @posix_only
    @pytest.mark.asyncio
    async def test_invalid_path_is_recorded_not_raised(
        self, project_root, make_executable, fake_logger
    ):
        """[TC-BIN-013] 잘못된 경로 - NUL 문자가 있는 후보도 실패 시도로 기록된다.

        테스트 목적:
            os.stat이 ValueError를 던지는 후보에서 탐지가 예외 없이 다음 후보로 넘어가는지 확인한다.

        테스트 시나리오:
            Given: NUL 문자가 포함된 후보와 실행 파일 후보가 있고
            When: detect_binary_path를 호출하면
            Then: 첫 시도는 FILE_NOT_FOUND로 기록되고 두 번째 후보가 선택된다

        Notes:
            없음
        """
        # Given
        exe = make_executable("bin/app")
        paths = ["bad\x00path", str(exe)]
        detector = BinaryDetector(StaticPathGenerator(paths), logger=fake_logger)

        # When
        result = await detector.detect_binary_path(_options(project_root))

        # Then
        assert result.success is True
        assert result.binary_path == str(exe)
        first = result.path_validation.attempts[0]
        assert first.error.type == PathValidationErrorType.FILE_NOT_FOUND
        assert "null" in first.error.message


class TestDetectBinaryPath:
    """탐지 전체 흐름 테스트."""

    @pytest.mark.asyncio
    async def test_generation_failure_skips_validation(self, project_root, fake_logger):
        """[TC-BIN-008] 경로 생성 실패 - 검증을 건너뛴다.

        테스트 목적:
            경로 생성이 실패하면 후보가 있어도 파일 시스템 검사를 하지 않는지 확인한다.

        테스트 시나리오:
            Given: NO_BUILD_TOOL 에러로 실패하는 생성기가 있고
            When: detect_binary_path를 호출하면
            Then: 결과는 실패, attempts는 0건, 생성 에러가 보존된다

        Notes:
            없음
        """
        # Given
        error = PathGenerationError(
            type=PathGenerationErrorType.NO_BUILD_TOOL,
            message="No build tool detected",
        )
        generator = StaticPathGenerator(["/usr/bin/env"], errors=[error], success=False)
        detector = BinaryDetector(generator, logger=fake_logger)

        # When
        result = await detector.detect_binary_path(_options(project_root))

        # Then
        assert result.success is False
        assert result.binary_path is None
        assert result.path_validation.attempts == ()
        assert result.path_generation.errors == (error,)
        assert "Path generation failed" in result.describe()

    @pytest.mark.asyncio
    async def test_empty_paths_yield_no_attempts(self, project_root, fake_logger):
        """[TC-BIN-009] 후보 없음 - 성공한 생성이라도 결과는 실패다.

        테스트 목적:
            생성은 성공했지만 후보가 없으면 검증 없이 실패하는지 확인한다.

        테스트 시나리오:
            Given: 빈 후보 목록을 반환하는 생성기가 있고
            When: detect_binary_path를 호출하면
            Then: success는 False, attempts는 0건이며 경고 로그가 남는다

        Notes:
            없음
        """
        # Given
        detector = BinaryDetector(StaticPathGenerator([]), logger=fake_logger)

        # When
        result = await detector.detect_binary_path(_options(project_root))

        # Then
        assert result.success is False
        assert result.path_generation.success is True
        assert result.path_validation.attempts == ()
        assert fake_logger.get_logs("warning")

    @pytest.mark.asyncio
    async def test_generator_receives_options(self, project_root, fake_logger):
        """[TC-BIN-010] 옵션 전달 - 생성기가 탐지 옵션을 받는다.

        테스트 목적:
            detect_binary_path에 전달한 옵션이 그대로 생성 전략에 전달되는지 확인한다.

        테스트 시나리오:
            Given: 프레임워크 버전과 추가 옵션이 포함된 옵션이 있고
            When: detect_binary_path를 호출하면
            Then: 생성기 호출 기록에 동일한 옵션이 남는다

        Notes:
            없음
        """
        # Given
        generator = StaticPathGenerator([])
        detector = BinaryDetector(generator, logger=fake_logger)
        options = BinaryDetectionOptions(
            project_root=str(project_root),
            framework_version="30.0.0",
            extra={"app_name": "demo"},
        )

        # When
        await detector.detect_binary_path(options)

        # Then
        assert generator.calls == [options]
        assert generator.calls[0].get("app_name") == "demo"

    @pytest.mark.asyncio
    async def test_subclass_overrides_generation(self, project_root, fake_logger):
        """[TC-BIN-011] 하위 클래스 전략 - 생성 단계를 오버라이드할 수 있다.

        테스트 목적:
            생성기를 주입하지 않은 하위 클래스가 generate_possible_paths로 후보를 제공하는지 확인한다.

        테스트 시나리오:
            Given: 존재하지 않는 경로 하나를 반환하는 하위 클래스가 있고
            When: detect_binary_path를 호출하면
            Then: 해당 경로 1건이 FILE_NOT_FOUND로 기록된다

        Notes:
            없음
        """
        # Given
        missing = str(project_root / "missing")

        class SingleCandidateDetector(BinaryDetector):
            async def generate_possible_paths(self, options):
                return PathGenerationResult.ok([missing])

        detector = SingleCandidateDetector(logger=fake_logger)

        # When
        result = await detector.detect_binary_path(_options(project_root))

        # Then
        assert result.success is False
        assert result.path_validation.attempts[0].path == missing
        assert f"{missing}: [FILE_NOT_FOUND]" in result.describe()

    @pytest.mark.asyncio
    async def test_missing_strategy_raises(self, project_root, fake_logger):
        """[TC-BIN-012] 전략 없음 - NotImplementedError가 발생한다.

        테스트 목적:
            생성기도 오버라이드도 없으면 명확한 에러가 발생하는지 확인한다.

        테스트 시나리오:
            Given: 생성기 없이 만든 BinaryDetector가 있고
            When: detect_binary_path를 호출하면
            Then: NotImplementedError가 발생한다

        Notes:
            없음
        """
        # Given
        detector = BinaryDetector(logger=fake_logger)

        # When / Then
        with pytest.raises(NotImplementedError):
            await detector.detect_binary_path(_options(project_root))
