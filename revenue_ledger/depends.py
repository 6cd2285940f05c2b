from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from revenue_ledger.adapter.services.notification_service import create_notification_service
from revenue_ledger.adapter.services.pdf_service import ReportLabPdfService
from revenue_ledger.adapter.services.snapshot_listener import SnapshotListener
from revenue_ledger.app.services.notification_service import NotificationService
from revenue_ledger.app.services.pdf_service import PdfService

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

snapshot_listener = SnapshotListener(
    AsyncSessionLocal, poll_interval=float(ApplicationConfig.SUBSCRIPTION_POLL_INTERVAL_SECONDS)
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_notification_service() -> NotificationService:
    return create_notification_service(ApplicationConfig.SETTLEMENT_NOTIFICATION_WEBHOOK)


def get_pdf_service() -> PdfService:
    return ReportLabPdfService()


def get_snapshot_listener() -> SnapshotListener:
    return snapshot_listener
