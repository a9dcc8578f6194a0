import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers.admin import router as admin_router

# Routers
from routers.attempts import router as attempts_router
from routers.grading import router as grading_router
from routers.health import router as health_router
from routers.mastery import router as mastery_router
from routers.math_tools import router as math_router
from routers.quiz_banks import router as quiz_banks_router

logger = logging.getLogger("mathtutor")
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

app = FastAPI(title="Math Tutor – Quiz & Mastery API")

# Allow calls from the Vite dev server; extra origins come from CORS_ORIGINS
_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:8080",
]
_origins += [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-api-key", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(grading_router)  # /quiz/evaluate, /quiz-banks/{id}/grade
app.include_router(quiz_banks_router)  # /quiz-banks/...
app.include_router(math_router)  # /math/...
app.include_router(mastery_router)  # /mastery/...
app.include_router(attempts_router)  # /attempts/...
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
