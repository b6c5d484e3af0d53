"""FastAPI application serving pool state and quotes."""

import uvicorn
from fastapi import FastAPI

from logit_amm import __version__
from logit_amm.api.endpoints import router
from logit_amm.config import ApiSettings

settings = ApiSettings.from_env()

app = FastAPI(
    title="Logit AMM",
    description="Pool state and quotes for logit-curve liquidity pools",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server (configured via LOGIT_AMM_* environment variables)."""
    uvicorn.run(
        "logit_amm.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
