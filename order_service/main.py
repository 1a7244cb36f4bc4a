from contextlib import asynccontextmanager
import logging
from typing import Optional

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from service_common.db import MAX_ID, init_db, make_engine, make_session_factory
from service_common.logconfig import configure_logging

from .aggregator import OrderAggregator
from .clients import product_client, user_client
from .config import Settings
from .errors import OrderServiceError
from .models import Base
from .schemas import OrderCreate, OrderWithDetails
from .store import OrderStore

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation": 400,
    "not_found": 404,
    "dependency_unavailable": 502,
    "storage": 500,
    "internal": 500,
}


def create_app(settings: Optional[Settings] = None, transport: Optional[httpx.BaseTransport] = None) -> FastAPI:
    """Build the order service.

    :param settings: service configuration, read from the environment when omitted
    :param transport: replaces the network transport used to reach the user and
        product services
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging("order_service", settings.log_path, settings.log_level)
        engine = make_engine(settings.database_url)
        init_db(engine, Base)
        http = httpx.Client(
            timeout=settings.remote_timeout,
            transport=transport or httpx.HTTPTransport(retries=settings.remote_retries),
        )
        app.state.aggregator = OrderAggregator(
            OrderStore(make_session_factory(engine)),
            user_client(settings.user_service_url, http),
            product_client(settings.product_service_url, http),
            parallel_fetch=settings.parallel_fetch,
        )
        logger.info(
            f"Order service using user service at {settings.user_service_url} "
            f"and product service at {settings.product_service_url}"
        )
        yield
        http.close()
        engine.dispose()

    app = FastAPI(lifespan=lifespan, title="Order Service")

    @app.exception_handler(OrderServiceError)
    async def handle_order_error(request: Request, exc: OrderServiceError):
        status_code = STATUS_BY_KIND[exc.kind]
        if status_code >= 500:
            logger.error(f"Request to {request.url.path} failed: {exc}")
            return JSONResponse(status_code=status_code, content={"detail": "Internal server error"})
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.post("/orders", response_model=OrderWithDetails, response_model_exclude_none=True, status_code=201)
    def create_order(order: OrderCreate, aggregator: OrderAggregator = Depends(get_aggregator)):
        """Create an order once its user and product are confirmed by their services.

        :raises HTTPException: 400 if either id is out of range
        """
        if not (0 < order.user_id <= MAX_ID and 0 < order.product_id <= MAX_ID):
            raise HTTPException(status_code=400, detail="Valid user_id and product_id are required")
        return aggregator.create_order(order.user_id, order.product_id)

    @app.get("/orders")
    def get_orders(id: Optional[str] = None, aggregator: OrderAggregator = Depends(get_aggregator)):
        if id is None or id == "":
            orders = aggregator.list_orders()
            return [order.model_dump(mode="json") for order in orders]
        try:
            order_id = int(id)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid order ID")
        if not 0 < order_id <= MAX_ID:
            raise HTTPException(status_code=400, detail="Invalid order ID")
        return aggregator.get_order(order_id).model_dump(mode="json", exclude_none=True)

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "order-service"}

    return app


def get_aggregator(request: Request) -> OrderAggregator:
    return request.app.state.aggregator


app = create_app()
