from contextlib import contextmanager
import logging
import threading

from sqlalchemy.exc import SQLAlchemyError

from .errors import OrderNotFound, StorageError
from .models import Order
from .schemas import OrderOut

logger = logging.getLogger(__name__)


class OrderStore:
    """Owns the persisted order records.

    Every session runs under one lock, so id assignment and insert happen as a
    single step even when many request threads create orders at once.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory
        self._lock = threading.Lock()

    @contextmanager
    def _session(self):
        with self._lock:
            db = self._session_factory()
            try:
                yield db
            except SQLAlchemyError as e:
                db.rollback()
                logger.exception(e)
                raise StorageError(str(e)) from e
            finally:
                db.close()

    def create(self, user_id: int, product_id: int) -> OrderOut:
        with self._session() as db:
            new_order = Order(user_id=user_id, product_id=product_id)
            db.add(new_order)
            db.commit()
            logger.info(f"Created new order: {new_order.to_dict()}")
            return OrderOut.model_validate(new_order)

    def get(self, order_id: int) -> OrderOut:
        with self._session() as db:
            order = db.get(Order, order_id)
            if order is None:
                raise OrderNotFound(order_id)
            return OrderOut.model_validate(order)

    def list(self):
        with self._session() as db:
            orders = db.query(Order).order_by(Order.id).all()
            return [OrderOut.model_validate(order) for order in orders]
