from dataclasses import dataclass
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse
from sword import FrameworkContext

from app.controllers import users_controller
from domain.repositories.user_repository import UserRepository
from domain.services.user_service import UserService

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


@dataclass(frozen=True)
class AppState:
    user_service: UserService


def build_router(ctx: FrameworkContext) -> FastAPI:
    user_repository = UserRepository(ctx.session_factory())
    user_service = UserService(user_repository)

    app = FastAPI(title="{{PROJECT_NAME}}")
    app.state.services = AppState(user_service=user_service)

    app.include_router(users_controller.router)

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon() -> FileResponse:
        return FileResponse(STATIC_DIR / "favicon.ico")

    return app
