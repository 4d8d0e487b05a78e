"""
user.py

사용자(User) 및 학교 단위 권한(UserRole) 모델 정의 파일.

사용자 인증은 외부 ID 공급자(Microsoft 계정)가 담당하므로
이 테이블은 비밀번호를 보관하지 않고,
ID 공급자가 발급한 사용자 ID를 그대로 기본 키로 사용한다.

"""

import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


"""
학교 단위 권한 정의

- COORDINATOR : 모든 동아리를 관리할 수 있는 학교 관리자

"""

class SchoolRole(str, Enum):
    COORDINATOR = "coordinator"


"""
사용자(User) 모델

- id        : ID 공급자가 발급한 사용자 식별자
- email     : 코디네이터 / 교사 이메일 목록 확인에 사용
- 동아리 claim 시 행이 없으면 자동으로 생성됨

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[str] = mapped_column(String(255), ForeignKey("users.id"), index=True, nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
