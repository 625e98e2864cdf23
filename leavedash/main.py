from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from leavedash.api.endpoints import leave_requests, approvals, holidays, notifications, team, profile, preferences
from leavedash.api.errors import register_exception_handlers
from leavedash.core.config import settings
from leavedash.core.logging import setup_logging
from leavedash.db.session import init_db

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    yield


app = FastAPI(
    title="Leave Management Dashboard",
    description="Dashboard API for leave requests, approvals, team status and holiday calendars",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware - the browser sends its session cookie with every call
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Include routers
app.include_router(leave_requests.router)
app.include_router(approvals.router)
app.include_router(holidays.router)
app.include_router(notifications.router)
app.include_router(team.router)
app.include_router(profile.router)
app.include_router(preferences.router)  # UI preferences (sidebar state)


@app.get("/")
def root():
    return {
        "message": "Leave Management Dashboard API",
        "docs": "/docs",
        "version": "1.0.0"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
