from celery import Celery
from celery.signals import setup_logging as celery_setup_logging
from src.core.config import settings
from src.core.logging import setup_logging

celery_app = Celery(
    "storefront",
    include=[
        "src.domain.tasks",
    ],
)

celery_app.conf.update(
    broker_url=str(settings.REDIS_URL),
    result_backend=str(settings.REDIS_URL),
    result_expires=4 * 60 * 60,  # 4 hours
    task_acks_late=True,
    task_default_queue=settings.CELERY_DEFAULT_TASKS_QUEUE,
    task_routes={"send_email_task": {"queue": settings.CELERY_DEFAULT_TASKS_QUEUE}},
    task_serializer="json",
    accept_content=["json"],
    broker_connection_retry_on_startup=True,
    timezone="UTC",
)


@celery_setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    """Workers log through the application's logging configuration."""
    setup_logging()
