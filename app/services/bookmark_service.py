import logging

from sqlalchemy.orm import Session

from app.models import Bookmark, Plan, User

logger = logging.getLogger(__name__)


class BookmarkService:
    """플랜 북마크 서비스"""

    def __init__(self, db: Session):
        self.db = db

    def count_bookmark(self, plan: Plan) -> int:
        return self.count_bookmark_by_plan_id(plan.plan_id)

    def count_bookmark_by_plan_id(self, plan_id: int) -> int:
        return self.db.query(Bookmark).filter(Bookmark.plan_id == plan_id).count()

    def is_bookmarked(self, user: User, plan: Plan) -> bool:
        return (
            self.db.query(Bookmark)
            .filter(Bookmark.user_id == user.user_id, Bookmark.plan_id == plan.plan_id)
            .first()
            is not None
        )

    def toggle_bookmark(self, user: User, plan: Plan) -> bool:
        """북마크 토글, 토글 후 북마크 상태 반환"""
        bookmark = (
            self.db.query(Bookmark)
            .filter(Bookmark.user_id == user.user_id, Bookmark.plan_id == plan.plan_id)
            .first()
        )
        if bookmark:
            self.db.delete(bookmark)
            self.db.commit()
            logger.info(f"북마크 취소: user {user.user_id} -> plan {plan.plan_id}")
            return False

        self.db.add(Bookmark(user_id=user.user_id, plan_id=plan.plan_id))
        self.db.commit()
        logger.info(f"북마크: user {user.user_id} -> plan {plan.plan_id}")
        return True

    def get_all_bookmarked_plans_by_user(self, user_id: int) -> list[Plan]:
        return (
            self.db.query(Plan)
            .join(Bookmark, Bookmark.plan_id == Plan.plan_id)
            .filter(Bookmark.user_id == user_id)
            .order_by(Bookmark.created_at.desc(), Bookmark.bookmark_id.desc())
            .all()
        )

    def get_recent_bookmarked_plans_by_user(self, user_id: int, limit: int = 3) -> list[Plan]:
        return (
            self.db.query(Plan)
            .join(Bookmark, Bookmark.plan_id == Plan.plan_id)
            .filter(Bookmark.user_id == user_id)
            .order_by(Bookmark.created_at.desc(), Bookmark.bookmark_id.desc())
            .limit(limit)
            .all()
        )
