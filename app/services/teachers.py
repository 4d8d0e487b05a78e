"""
services/teachers.py

인증된 교사(스폰서 자격자) 이메일 확인.

교사 여부는 DB 플래그가 아니라 관리자가 직접 관리하는
이메일 목록으로만 판단한다.

- settings.TEACHER_EMAILS      : 콤마 구분 목록
- settings.TEACHER_EMAILS_FILE : {"teacherEmails": [...]} 형태의 JSON 파일

두 목록의 합집합을 사용한다.

"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from app.core.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _teacher_emails() -> frozenset[str]:
    emails = set(settings.teacher_emails)

    if settings.TEACHER_EMAILS_FILE:
        path = Path(settings.TEACHER_EMAILS_FILE)
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
        emails.update(e.strip().lower() for e in data.get("teacherEmails", []) if e.strip())
        logger.info("Loaded teacher allow-list from %s", path)

    return frozenset(emails)


def reload_teacher_emails() -> None:
    _teacher_emails.cache_clear()


def is_teacher_email(email: str | None) -> bool:
    if not email:
        return False
    return email.strip().lower() in _teacher_emails()


def teacher_count() -> int:
    return len(_teacher_emails())
