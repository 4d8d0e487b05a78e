"""
users.py

사용자 권한 / 교사 인증 조회 API 모음.

프론트엔드가 화면 구성(관리자 메뉴, 스폰서 claim 버튼 노출 등)을
결정하기 위해 호출하는 읽기 전용 API이다.

주요 기능:
- 사용자 권한 스냅샷 조회 (코디네이터 / 스폰서 / 회장 / 임원)
- 이메일의 인증된 교사 여부 확인

설계 원칙:
- 조회 전용, 상태 변경 없음
- 권한 조회 실패 시 "권한 없음" 스냅샷 반환

관련 파일:
- app.services.roles       : 권한 스냅샷 계산
- app.services.teachers    : 교사 이메일 목록
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_role_oracle
from app.services.roles import AuthorizationOracle, get_user_roles
from app.services.teachers import is_teacher_email

router = APIRouter(prefix="/users", tags=["users"])


"""
교사 인증 여부 확인 API

- 관리자가 관리하는 교사 이메일 목록 기준
- 대소문자 구분 없음

"""
@router.get("/check-teacher")
def check_teacher(email: str = Query(..., min_length=1)):
    return {
        "success": True,
        "isTeacher": is_teacher_email(email),
        "email": email.lower(),
    }


"""
사용자 권한 스냅샷 조회 API

"""
@router.get("/{user_id}/roles")
def user_roles(
    user_id: str,
    db: Session = Depends(get_db),
    oracle: AuthorizationOracle = Depends(get_role_oracle),
):
    return {"success": True, "data": get_user_roles(db, user_id, oracle).as_dict()}
