import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from funnelscope.config import ALGO_VERSION, ALLOW_ORIGINS, APP_TITLE, APP_VERSION, DATA_DIR
from funnelscope.funnels.registry import FUNNEL_TYPES
from funnelscope.routers import export, funnels, metrics, prospects

log = logging.getLogger("funnelscope")

app = FastAPI(title=APP_TITLE, version=APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Routers ---
app.include_router(funnels.router)
app.include_router(metrics.router)
app.include_router(prospects.router)
app.include_router(export.router)

log.info("%s %s: %d funnel types, data dir %s", APP_TITLE, APP_VERSION, len(FUNNEL_TYPES), DATA_DIR)


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/version")
def version():
    return {"version": app.version, "algo_version": ALGO_VERSION}
