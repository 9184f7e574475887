from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clmm_yield.api.routers import projections, range_presets, reward_strategies


app = FastAPI(title="CLMM Yield API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(projections.router)
app.include_router(reward_strategies.router)
app.include_router(range_presets.router)


@app.get("/health")
def health():
    return {"status": "ok"}
