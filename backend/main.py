import logging
import os
import sys
import time

# Ensure this directory is in the path for uvicorn and other runners
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from database import init_db
from errors import register_error_handlers
from routes.achievement_routes import router as achievement_router
from routes.ai_routes import router as ai_router
from routes.auth_routes import router as auth_router
from routes.journal_routes import router as journal_router
from routes.prompt_routes import router as prompt_router
from routes.user_routes import router as user_router

logger = logging.getLogger("gratitude.http")

init_db()

app = FastAPI(title="Gratitude Journal API")
register_error_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.get("/api/v1/health-check")
async def health():
    return {"status": "ok", "message": "Backend is alive!"}


# Configure CORS for the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict to the frontend origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(user_router)
app.include_router(journal_router)
app.include_router(achievement_router)
app.include_router(prompt_router)
app.include_router(ai_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
