"""
이메일 전송 서비스
"""

import logging

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from jinja2 import Template

from ..config import settings

logger = logging.getLogger(__name__)

TEMP_PASSWORD_TEMPLATE = Template("""
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>TodoTravel 임시 비밀번호</title>
</head>
<body style="font-family: Arial, sans-serif; color: #333;">
    <h2>TodoTravel 임시 비밀번호 안내</h2>
    <p>{{ user_name }}님, 요청하신 임시 비밀번호입니다.</p>
    <p style="font-size: 20px; font-weight: bold; letter-spacing: 2px;">{{ temp_password }}</p>
    <p>로그인 후 반드시 비밀번호를 변경해주세요.</p>
</body>
</html>
""")


class EmailService:
    """이메일 전송 서비스"""

    def __init__(self):
        if not all([settings.mail_username, settings.mail_password, settings.mail_from]):
            logger.warning("이메일 설정이 없습니다. 이메일 기능이 비활성화됩니다.")
            self.fastmail = None
            return

        try:
            self.conf = ConnectionConfig(
                MAIL_USERNAME=settings.mail_username,
                MAIL_PASSWORD=settings.mail_password,
                MAIL_FROM=settings.mail_from,
                MAIL_PORT=settings.mail_port,
                MAIL_SERVER=settings.mail_server,
                MAIL_FROM_NAME=settings.mail_from_name,
                MAIL_STARTTLS=settings.mail_starttls,
                MAIL_SSL_TLS=settings.mail_ssl_tls,
                USE_CREDENTIALS=True,
                VALIDATE_CERTS=True,
            )
            self.fastmail = FastMail(self.conf)
            logger.info("이메일 서비스 초기화 완료")
        except Exception as e:
            logger.warning(f"이메일 서비스 초기화 실패: {e}")
            self.fastmail = None

    async def send_temporary_password_email(
        self, email: str, temp_password: str, user_name: str | None = None
    ) -> bool:
        """임시 비밀번호 이메일 전송"""
        if not self.fastmail:
            logger.warning("이메일 서비스가 초기화되지 않음")
            return False

        try:
            html_content = TEMP_PASSWORD_TEMPLATE.render(
                user_name=user_name or "회원", temp_password=temp_password
            )
            message = MessageSchema(
                subject="[TodoTravel] 임시 비밀번호 안내",
                recipients=[email],
                body=html_content,
                subtype=MessageType.html,
            )
            await self.fastmail.send_message(message)
            logger.info(f"임시 비밀번호 이메일 전송 완료: {email}")
            return True
        except Exception as e:
            logger.error(f"임시 비밀번호 이메일 전송 실패 ({email}): {e}")
            return False


async def send_temp_password_email(email: str, temp_password: str, user_name: str | None = None) -> bool:
    """임시 비밀번호 이메일 전송 헬퍼"""
    return await EmailService().send_temporary_password_email(email, temp_password, user_name)
