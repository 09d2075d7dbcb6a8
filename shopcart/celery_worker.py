# shopcart/celery_worker.py
from celery import Celery

from shopcart.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "shopcart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski importowane explicite, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "shopcart.tasks.purge",
)

celery_app.conf.beat_schedule = {
    "purge-checkout-records-hourly": {
        "task": "shopcart.tasks.purge.purge_checkout_records_task",
        "schedule": 60.0 * 60,
    },
}

celery_app.conf.timezone = "UTC"
