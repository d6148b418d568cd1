"""
Engine Service

Wires storages, the mail transport and the portal services together.
One instance per process, created lazily by get_engine_service().
"""
import logging
from typing import List, Optional

from ..config import Config
from ..storage.base import BaseStorage
from ..storage.member_storage import MemberStorage
from ..storage.post_storage import PostStorage
from ..storage.calendar_storage import CalendarStorage
from ..storage.notification_storage import NotificationStorage
from ..notifications.base_sender import BaseSender
from ..notifications.email_sender import EmailSender
from .mention_service import MentionService
from .recipient_service import RecipientService
from .notification_service import NotificationService
from .calendar_service import CalendarService
from .post_service import PostService

logger = logging.getLogger("byte.services.engine")

_engine_service: Optional["EngineService"] = None


def build_email_sender() -> Optional[BaseSender]:
    """SMTP transport from Config, or None when no credentials are set"""
    if not Config.smtp_enabled():
        logger.info("Email delivery disabled (SMTP_USER / SMTP_PASSWORD not set)")
        return None
    return EmailSender(
        smtp_host=Config.SMTP_HOST,
        smtp_port=Config.SMTP_PORT,
        smtp_user=Config.SMTP_USER,
        smtp_password=Config.SMTP_PASSWORD,
        use_tls=Config.SMTP_SECURE,
        from_email=Config.SMTP_FROM,
        from_name=Config.SMTP_FROM_NAME,
        timeout=Config.SMTP_TIMEOUT,
    )


class EngineService:
    """
    Composite engine service.

    Owns the PostgreSQL storages and the services built on them. close()
    waits for in-flight notification emails before disconnecting.
    """

    def __init__(self, postgres_dsn: Optional[str] = None, email_sender: Optional[BaseSender] = None):
        dsn = postgres_dsn or Config.get_postgres_dsn()

        self.member_storage = MemberStorage(dsn)
        self.post_storage = PostStorage(dsn)
        self.calendar_storage = CalendarStorage(dsn)
        self.notification_storage = NotificationStorage(dsn)

        self.email_sender = email_sender if email_sender is not None else build_email_sender()

        self.notification_service = NotificationService(
            member_storage=self.member_storage,
            notification_storage=self.notification_storage,
            sender=self.email_sender,
            site_url=Config.SITE_URL,
        )
        self.calendar_service = CalendarService(self.calendar_storage)
        self.post_service = PostService(
            post_storage=self.post_storage,
            member_storage=self.member_storage,
            mention_service=MentionService(),
            recipient_service=RecipientService(),
            notification_service=self.notification_service,
        )

        self._initialized = False

    @property
    def storages(self) -> List[BaseStorage]:
        return [self.member_storage, self.post_storage, self.calendar_storage, self.notification_storage]

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self):
        """Connect every storage"""
        if self._initialized:
            return
        for storage in self.storages:
            await storage.init()
        self._initialized = True
        logger.info(
            f"EngineService ready ({len(self.storages)} storages, "
            f"email {'on' if self.notification_service.email_enabled else 'off'})"
        )

    async def close(self):
        """Drain pending emails, then disconnect"""
        await self.notification_service.close()
        for storage in self.storages:
            await storage.close()
        self._initialized = False
        logger.info("EngineService closed")


def get_engine_service() -> EngineService:
    """Get or create engine service singleton"""
    global _engine_service
    if _engine_service is None:
        _engine_service = EngineService()
    return _engine_service


async def init_engine_service() -> EngineService:
    """Initialize and return engine service"""
    service = get_engine_service()
    await service.initialize()
    return service
