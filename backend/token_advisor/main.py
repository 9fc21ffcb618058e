from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from strawberry.fastapi import GraphQLRouter

from .config.settings import settings
from .errors import RetrievalError
from .graphql.schema import schema
from .services.analysis_service import analysis_service
from .services.fetcher import price_fetcher
from .utils.logger import log

app = FastAPI(
    title="Token Risk Advisor",
    description="Token price lookup and AI-assisted risk analysis",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# Mount GraphQL
# -----------------------------
graphql_app = GraphQLRouter(schema)
app.include_router(graphql_app, prefix="/graphql")


# -----------------------------
# Spot price
# -----------------------------
@app.get("/api/price")
async def fetch_price(token_id: Optional[str] = None):
    token_id = token_id or settings.TOKEN_ID
    try:
        spot = await price_fetcher.fetch_spot_price(token_id)
    except RetrievalError as e:
        log.error(f"Error fetching {token_id} price: {e}")
        return JSONResponse(
            status_code=502,
            content={
                "success": False,
                "message": f"Failed to fetch {token_id} price",
                "error": str(e),
            },
        )

    return {
        "success": True,
        "price": spot.price,
        "currency": spot.currency,
        "token_id": spot.token_id,
        "timestamp": spot.timestamp.isoformat(),
    }


# -----------------------------
# Risk analysis (never fails; degrades to fallback record)
# -----------------------------
@app.get("/api/analyze")
async def analyze(token_id: Optional[str] = None):
    token_id = token_id or settings.TOKEN_ID
    analysis = await analysis_service.analyze_token_risk(token_id)
    return {
        "success": True,
        "token_id": token_id,
        "analysis": analysis.to_response(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/health")
async def health():
    return {"status": "ok", "env": settings.ENV}
