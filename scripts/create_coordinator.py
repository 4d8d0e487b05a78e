"""

코디네이터 계정 지정 스크립트.

- 서버 최초 세팅 시, 또는 코디네이터를 DB로 추가할 때 실행하는 용도
- .env에 정의된 COORDINATOR_USER_ID / COORDINATOR_NAME / COORDINATOR_EMAIL 을 읽어
  users 행이 없으면 만들고 user_roles 에 coordinator 권한을 부여한다.
- 이미 coordinator 권한이 있으면 아무것도 하지 않고 종료한다.

사용 목적:
- COORDINATOR_EMAILS 설정 목록과 별개로,
  DB에서 관리되는 코디네이터를 안전하게 초기화하기 위함

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_coordinator

"""

import os
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select
from app.db.session import SessionLocal
from app.models.user import SchoolRole, User, UserRole



def main():
    db = SessionLocal()
    try:
        user_id = os.environ["COORDINATOR_USER_ID"]
        name = os.environ.get("COORDINATOR_NAME", "Coordinator")
        email = os.environ.get("COORDINATOR_EMAIL")

        exists = db.scalar(
            select(UserRole).where(
                UserRole.user_id == user_id,
                UserRole.role == SchoolRole.COORDINATOR.value,
            )
        )
        if exists:
            print("✅ Coordinator role already granted. Skip.")
            return

        user = db.get(User, user_id)
        if user is None:
            user = User(id=user_id, name=name, email=email)
            db.add(user)
            db.flush()

        db.add(UserRole(user_id=user_id, role=SchoolRole.COORDINATOR.value))
        db.commit()

        print(f"🚀 Coordinator role granted: {user_id} ({email or 'no email'})")

    finally:
        db.close()


if __name__ == "__main__":
    main()
