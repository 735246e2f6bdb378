import os
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Load environment variables before the config module reads them
load_dotenv()

# Ensure the current directory is in sys.path to allow imports from 'saveit'
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from saveit.core import config
from saveit.core.errors import ProxyError
from saveit.api import code, courses, items, summary

app = FastAPI(title="SaveIt.AI")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(ProxyError)
async def proxy_error_handler(request: Request, exc: ProxyError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())

app.include_router(items.router, prefix="/api", tags=["items"])
app.include_router(code.router, prefix="/api/code", tags=["code"])
app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
app.include_router(summary.router, prefix="/api", tags=["summary"])

@app.get("/api/health")
async def health():
    return {"status": "ok"}

logger.info(f"Forwarding API requests to {config.BACKEND_URL}")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
