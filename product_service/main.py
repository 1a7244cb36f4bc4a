from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from sqlalchemy.orm import Session

from service_common.db import MAX_ID, init_db, make_engine, make_session_factory
from service_common.logconfig import configure_logging

from .config import ProductSettings
from .models import Base, Product
from .schemas import ProductCreate, ProductOut

logger= logging.getLogger(__name__)


def create_app(settings: Optional[ProductSettings] = None) -> FastAPI:
    settings = settings or ProductSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging("product_service", settings.log_path, settings.log_level)
        engine = make_engine(settings.database_url)
        init_db(engine, Base)
        app.state.session_factory = make_session_factory(engine)
        yield
        engine.dispose()

    app= FastAPI(lifespan=lifespan, title="Product Service")

    @app.post("/products", response_model= ProductOut, status_code=201)
    def create_product(product: ProductCreate, db: Session = Depends(get_db)):
        new_product= Product(**product.model_dump())
        db.add(new_product)
        db.commit()
        logger.info(f"Created new product: {new_product.to_dict()}")
        return new_product

    @app.get("/products")
    def get_products(id: Optional[str] = None, category: Optional[str] = None, db: Session = Depends(get_db)):
        """Return one product by ``id``, the products of a ``category``, or all of them."""
        if id:
            product = db.get(Product, parse_id(id))
            if not product:
                raise HTTPException(status_code=404, detail="Product not found")
            return ProductOut.model_validate(product).model_dump(mode="json")
        query = db.query(Product)
        if category:
            query = query.filter(Product.category == category)
        return [ProductOut.model_validate(p).model_dump(mode="json") for p in query.order_by(Product.id)]

    @app.put("/products", response_model= ProductOut)
    def update_product(id: str, product: ProductCreate, db: Session = Depends(get_db)):
        db_product = db.get(Product, parse_id(id))
        if not db_product:
            raise HTTPException(status_code=404, detail="Product not found")
        for field, value in product.model_dump().items():
            setattr(db_product, field, value)
        db.commit()
        logger.info(f"Updated product: {db_product.to_dict()}")
        return db_product

    @app.delete("/products", status_code=204)
    def delete_product(id: str, db: Session = Depends(get_db)):
        db_product = db.get(Product, parse_id(id))
        if not db_product:
            raise HTTPException(status_code=404, detail="Product not found")
        db.delete(db_product)
        db.commit()
        logger.info(f"Deleted product {db_product.id}")
        return Response(status_code=204)

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "product-service"}

    return app


def get_db(request: Request):
    db= request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def parse_id(raw: str) -> int:
    try:
        entity_id = int(raw)
    except ValueError:
        entity_id = 0
    if not 0 < entity_id <= MAX_ID:
        raise HTTPException(status_code=400, detail="Invalid product ID")
    return entity_id


app = create_app()
