import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agrimarket.core.config import settings
from agrimarket.core.errors import AgriMarketError
from agrimarket.db.init import init_db
from agrimarket.db.session import engine
from agrimarket.api import listings, purchases, cart, ledger
from agrimarket.auth.jwt import router as auth_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend API for the AgriMarket crop marketplace",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AgriMarketError)
async def agrimarket_error_handler(request: Request, exc: AgriMarketError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.code},
    )


@app.on_event("startup")
async def startup_event():
    init_db()
    logger.info("Database initialized")


@app.on_event("shutdown")
async def shutdown_event():
    engine.dispose()


app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(listings.router, prefix="/listings", tags=["listings"])
app.include_router(purchases.router, prefix="/purchases", tags=["purchases"])
app.include_router(cart.router, prefix="/cart", tags=["cart"])
app.include_router(ledger.router, prefix="/ledger", tags=["ledger"])

@app.get("/")
def read_root():
    return {"message": "Welcome to AgriMarket API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("agrimarket.main:app", host="0.0.0.0", port=8000)
