import logging

from sqlalchemy.orm import Session

from app.exceptions import ForbiddenException, NotFoundException
from app.models import Comment, Plan, User
from app.schemas.alarm_schemas import AlarmRequest
from app.schemas.plan_schemas import CommentRequest
from app.services.alarm_service import AlarmService

logger = logging.getLogger(__name__)


class CommentService:
    """플랜 댓글 서비스"""

    def __init__(self, db: Session):
        self.db = db

    def get_comments_by_plan(self, plan: Plan) -> list[Comment]:
        return (
            self.db.query(Comment)
            .filter(Comment.plan_id == plan.plan_id)
            .order_by(Comment.created_at.asc(), Comment.comment_id.asc())
            .all()
        )

    def create_comment(self, plan: Plan, user: User, dto: CommentRequest) -> Comment:
        comment = Comment(plan_id=plan.plan_id, user_id=user.user_id, content=dto.content)
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        logger.info(f"댓글 작성: comment {comment.comment_id} on plan {plan.plan_id}")

        if plan.plan_user_id != user.user_id:
            AlarmService(self.db).create_alarm_safely(
                AlarmRequest(
                    member_id=plan.plan_user_id,
                    alarm_content=f"[{plan.title}] 플랜에 {user.nickname}님이 댓글을 남겼습니다.",
                )
            )
        return comment

    def _get_own_comment(self, plan: Plan, comment_id: int, user: User) -> Comment:
        comment = (
            self.db.query(Comment)
            .filter(Comment.comment_id == comment_id, Comment.plan_id == plan.plan_id)
            .first()
        )
        if not comment:
            raise NotFoundException("댓글을 찾을 수 없습니다.")
        if comment.user_id != user.user_id:
            raise ForbiddenException("본인이 작성한 댓글만 수정/삭제할 수 있습니다.")
        return comment

    def update_comment(self, plan: Plan, comment_id: int, user: User, dto: CommentRequest) -> Comment:
        comment = self._get_own_comment(plan, comment_id, user)
        comment.content = dto.content
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def delete_comment(self, plan: Plan, comment_id: int, user: User) -> None:
        comment = self._get_own_comment(plan, comment_id, user)
        self.db.delete(comment)
        self.db.commit()
        logger.info(f"댓글 삭제: comment {comment_id}")
