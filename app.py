from datetime import datetime, timezone
from typing import Any, Dict

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import load_settings
from core.consul_api import ConsulAPI
from server import build_mcp, configure_logging

# -----------------------------
# Config
# -----------------------------
load_dotenv()
SETTINGS = load_settings()
configure_logging(SETTINGS.log_level)

SERVICE_NAME = SETTINGS.service_name
VERSION = SETTINGS.version

consul = ConsulAPI.from_settings(SETTINGS)


def utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def consul_url() -> str:
    scheme = "https" if SETTINGS.consul_secure else "http"
    return f"{scheme}://{SETTINGS.consul_host}:{SETTINGS.consul_port}"


# -----------------------------
# MCP over streamable HTTP
# -----------------------------
mcp = build_mcp(consul, SETTINGS)
mcp_app = mcp.http_app(path="/mcp")

# -----------------------------
# FastAPI (health + CORS)
# -----------------------------
app = FastAPI(title=SERVICE_NAME, version=VERSION, lifespan=mcp_app.lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root() -> Dict[str, Any]:
    return {
        "ok": True,
        "message": "Consul MCP gateway alive",
        "service": SERVICE_NAME,
        "version": VERSION,
        "ts": utc_iso(),
        "consul": consul_url(),
        "expose_writes": SETTINGS.expose_writes,
        "mcp": "/mcp",
    }


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "ts": utc_iso(), "service": SERVICE_NAME, "version": VERSION}


@app.get("/ready")
def ready():
    try:
        leader = consul.status_leader()
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={"ok": False, "ts": utc_iso(), "consul": consul_url(), "error": str(e)},
        )
    return {"ok": True, "ts": utc_iso(), "consul": consul_url(), "leader": leader}


# Mount MCP endpoint (gives /mcp)
app.mount("/", mcp_app)
