import logging

from sqlalchemy.orm import Session

from app.models import Like, Plan, User

logger = logging.getLogger(__name__)


class LikeService:
    """플랜 좋아요 서비스"""

    def __init__(self, db: Session):
        self.db = db

    def count_like(self, plan: Plan) -> int:
        return self.count_like_by_plan_id(plan.plan_id)

    def count_like_by_plan_id(self, plan_id: int) -> int:
        return self.db.query(Like).filter(Like.plan_id == plan_id).count()

    def is_liked(self, user: User, plan: Plan) -> bool:
        return (
            self.db.query(Like)
            .filter(Like.user_id == user.user_id, Like.plan_id == plan.plan_id)
            .first()
            is not None
        )

    def toggle_like(self, user: User, plan: Plan) -> bool:
        """좋아요 토글, 토글 후 좋아요 상태 반환"""
        like = (
            self.db.query(Like)
            .filter(Like.user_id == user.user_id, Like.plan_id == plan.plan_id)
            .first()
        )
        if like:
            self.db.delete(like)
            self.db.commit()
            logger.info(f"좋아요 취소: user {user.user_id} -> plan {plan.plan_id}")
            return False

        self.db.add(Like(user_id=user.user_id, plan_id=plan.plan_id))
        self.db.commit()
        logger.info(f"좋아요: user {user.user_id} -> plan {plan.plan_id}")
        return True

    def get_all_liked_plans_by_user(self, user_id: int) -> list[Plan]:
        return (
            self.db.query(Plan)
            .join(Like, Like.plan_id == Plan.plan_id)
            .filter(Like.user_id == user_id)
            .order_by(Like.created_at.desc(), Like.like_id.desc())
            .all()
        )

    def get_recent_liked_plans_by_user(self, user_id: int, limit: int = 3) -> list[Plan]:
        return (
            self.db.query(Plan)
            .join(Like, Like.plan_id == Plan.plan_id)
            .filter(Like.user_id == user_id)
            .order_by(Like.created_at.desc(), Like.like_id.desc())
            .limit(limit)
            .all()
        )
