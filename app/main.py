from fastapi import FastAPI
from .routes.receipts import router as receipts_router

app = FastAPI(title="Receipt Processor",
              description="Scores purchase receipts and serves their points",
    version="0.1.0",
    docs_url="/docs",          # Swagger UI
    redoc_url="/redoc",        # ReDoc
    openapi_url="/openapi.json")

app.include_router(receipts_router)

@app.get("/health")
def health():
    return {"ok": True}
