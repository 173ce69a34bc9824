from fastapi import APIRouter

from src.portfolio_api.api.routes import auth, contact, dashboard, messages, projects, upload

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(contact.router)
api_router.include_router(messages.router)
api_router.include_router(projects.router)
api_router.include_router(upload.router)
api_router.include_router(dashboard.router)
