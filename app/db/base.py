"""
base.py

SQLAlchemy ORM Base 정의 파일.

모든 모델(User, Club, ClubMember, LeadershipRequest, AuditLog 등)은
이 Base를 상속받고, 테이블 메타데이터는 Base.metadata 하나로 모인다.
테스트의 create_all / drop_all 과 Alembic 마이그레이션이 같은 메타데이터를 사용한다.

제약 조건 이름 규칙:
- 이름을 직접 주지 않은 인덱스 / 유니크 / FK / PK 에 일정한 이름을 붙임
- DB 종류(SQLite / PostgreSQL)와 무관하게 같은 이름이 생성됨

관련 파일:
- app.models.*            : 모든 ORM 모델
- alembic/versions/*      : 테이블 생성 마이그레이션

"""

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# 모든 ORM 모델이 상속받는 Base 클래스
Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))
