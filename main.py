from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from routers import businesses, cards, payments
from database import engine, Base
from errors import PaymentError, Unauthorized
from settings import get_settings
import logging

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Card Payments API",
    version="1.0.0",
    description="Point-of-sale and online payment authorization for physical and virtual cards"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# DB
Base.metadata.create_all(engine)

# Include routers
app.include_router(cards.router)
app.include_router(businesses.router)
app.include_router(payments.router)

# Error handlers
@app.exception_handler(PaymentError)
async def payment_error_handler(request: Request, exc: PaymentError):
    if isinstance(exc, Unauthorized):
        logger.warning(f"❌ Refused on {request.url.path}: {exc.reason}")
    else:
        logger.warning(f"❌ {exc.message} on {request.url.path}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())

@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}},
    )

@app.get("/")
async def root():
    return {
        "message": "Card Payments API",
        "version": "1.0.0",
        "status": "✅ Ready for payments"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
