from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# 프론트엔드는 camelCase(userId 등)로 전송
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClaimRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_avatar: Optional[str] = None


class ClaimSponsorRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    confirmed: bool = False


class UserActionRequest(CamelModel):
    user_id: str = Field(..., min_length=1)


class JoinRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    user_name: Optional[str] = None
    user_email: Optional[str] = None


class TransferRequest(CamelModel):
    from_user_id: str = Field(..., min_length=1)
    to_user_id: str = Field(..., min_length=1)


class LeavePresidencyRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    new_president_id: Optional[str] = None


# 역할 값 검증은 서비스에서 수행 (잘못된 값은 "Invalid role" 400)
class RoleUpdateRequest(CamelModel):
    role: str = Field(..., min_length=1)
    updated_by: str = Field(..., min_length=1)


class AdminTargetRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    target_user_id: str = Field(..., min_length=1)


class LeadershipRequestCreate(CamelModel):
    requested_by: str = Field(..., min_length=1)
    target_user_id: str = Field(..., min_length=1)
    action_type: str = Field(..., min_length=1, examples=["add_officer"])
    new_role: Optional[str] = None


class ReviewRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)
    rejection_reason: Optional[str] = None


# 일괄 등록 항목: 필수값 누락은 항목 단위 오류로 보고하므로 모두 선택값
class ClubImportEntry(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    meeting_time: Optional[str] = None
    location: Optional[str] = None
    tags: Optional[List[str]] = None


class ClubImportRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    clubs: List[ClubImportEntry] = Field(default_factory=list)


# body에 포함된 필드만 변경 (null 전달 시 값 비움)
class ClubUpdateRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    description: Optional[str] = None
    meeting_time: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
