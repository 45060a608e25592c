from fastapi import APIRouter

from src.taskboard.api.routes import auth, tasks, teams, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(teams.router)
api_router.include_router(tasks.router)
