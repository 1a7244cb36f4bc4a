from concurrent.futures import ThreadPoolExecutor
import logging

from service_common.db import MAX_ID

from .clients import FetchFailed, RemoteEntityClient
from .errors import DependencyUnavailable, OrderValidationError
from .schemas import OrderOut, OrderWithDetails
from .store import OrderStore

logger = logging.getLogger(__name__)


def _require_valid_ids(**ids):
    for name, value in ids.items():
        if not isinstance(value, int) or isinstance(value, bool) or not 0 < value <= MAX_ID:
            raise OrderValidationError(f"{name} must be an integer between 1 and {MAX_ID}")


class OrderAggregator:
    """Combines the order store with the user and product services.

    Snapshots are fetched fresh on every call and never stored. Either fetch
    failing fails the whole call; a composite is never returned with a
    snapshot missing.
    """

    def __init__(
        self,
        store: OrderStore,
        users: RemoteEntityClient,
        products: RemoteEntityClient,
        parallel_fetch: bool = False,
    ):
        self.store = store
        self.users = users
        self.products = products
        self.parallel_fetch = parallel_fetch

    def create_order(self, user_id: int, product_id: int) -> OrderWithDetails:
        """Validate both references remotely, then persist the order.

        Nothing is written unless both fetches succeed, so a failed create
        leaves the store untouched.
        """
        _require_valid_ids(user_id=user_id, product_id=product_id)
        user, product = self._fetch_details(user_id, product_id)
        order = self.store.create(user_id, product_id)
        return self._compose(order, user, product)

    def get_order(self, order_id: int) -> OrderWithDetails:
        """Load the order, then re-fetch its user and product as they are now."""
        _require_valid_ids(order_id=order_id)
        order = self.store.get(order_id)
        user, product = self._fetch_details(order.user_id, order.product_id)
        return self._compose(order, user, product)

    def list_orders(self):
        # Bare records only: listing must not fan out or depend on the other services.
        return self.store.list()

    def _fetch_details(self, user_id, product_id):
        if self.parallel_fetch:
            return self._fetch_concurrently(user_id, product_id)
        user = self._fetch("user", self.users, user_id)
        product = self._fetch("product", self.products, product_id)
        return user, product

    def _fetch_concurrently(self, user_id, product_id):
        with ThreadPoolExecutor(max_workers=2) as pool:
            user_future = pool.submit(self._fetch, "user", self.users, user_id)
            product_future = pool.submit(self._fetch, "product", self.products, product_id)
            user_error = user_future.exception()
            product_error = product_future.exception()

        if user_error is not None:
            if product_error is not None:
                logger.error(f"Product fetch also failed for product {product_id}: {product_error}")
            raise user_error
        if product_error is not None:
            raise product_error
        return user_future.result(), product_future.result()

    @staticmethod
    def _fetch(dependency, client, entity_id):
        try:
            return client.fetch(entity_id)
        except FetchFailed as e:
            logger.warning(f"Failed to fetch {dependency} {entity_id}: {e}")
            raise DependencyUnavailable(dependency, str(e), status_code=e.status_code) from e

    @staticmethod
    def _compose(order: OrderOut, user, product) -> OrderWithDetails:
        return OrderWithDetails(**order.model_dump(), user=user, product=product)
