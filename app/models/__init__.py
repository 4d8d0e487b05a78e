# Base.metadata에 모든 테이블을 등록하기 위한 import
from app.models.user import User, UserRole, SchoolRole  # noqa: F401
from app.models.club import Club, ClubMember, ClubSponsor, ClubTag, MemberRole, SponsorStatus  # noqa: F401
from app.models.leadership import (  # noqa: F401
    LeadershipAction,
    LeadershipRequest,
    PresidencyTransfer,
    RequestStatus,
)
from app.models.audit_log import AuditAction, AuditLog  # noqa: F401
