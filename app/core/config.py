"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

이 파일은 .env 환경 변수들을 Pydantic BaseSettings를 통해 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보
- 로그 레벨
- CORS 허용 도메인 목록
- 코디네이터 이메일 목록 (설정 기반 관리자)
- 인증된 교사 이메일 목록 (스폰서 자격 확인용)

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 로컬 / 테스트 / 운영 환경을 .env로 분리하여 관리
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- app.main               : CORS / 로깅 초기화 시 설정 사용
- app.db.session         : DATABASE_URL 사용
- app.services.roles     : COORDINATOR_EMAILS 사용
- app.services.teachers  : TEACHER_EMAILS / TEACHER_EMAILS_FILE 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


def _split_emails(raw: str) -> List[str]:
    return [e.strip().lower() for e in raw.split(",") if e.strip()]


# .env 파일에 정의된 환경 변수를 로드하는 설정 클래스
# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "BerkConnect"

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    # SQLite에서는 무시됨
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    LOG_LEVEL: str = "INFO"

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # 코디네이터 이메일 목록 (콤마 구분)
    # - user_roles 테이블과 별개로 설정 파일만으로 관리자 지정 가능
    COORDINATOR_EMAILS: str = ""

    # 인증된 교사 이메일 목록
    # - TEACHER_EMAILS   : 콤마 구분 문자열
    # - TEACHER_EMAILS_FILE : {"teacherEmails": [...]} 형태의 JSON 파일 경로
    TEACHER_EMAILS: str = ""
    TEACHER_EMAILS_FILE: str | None = None

    # 감사 로그 기록 여부 (False면 기록 생략)
    AUDIT_LOG_ENABLED: bool = True

    @property
    def coordinator_emails(self) -> List[str]:
        return _split_emails(self.COORDINATOR_EMAILS)

    @property
    def teacher_emails(self) -> List[str]:
        return _split_emails(self.TEACHER_EMAILS)


# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
# 실행 시 한 번만 생성됨
settings = Settings()
