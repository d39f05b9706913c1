from fastapi import FastAPI

from timeboard.logging_setup import setup_logging
from timeboard.routes.auth import router as auth_router
from timeboard.routes.clients import router as clients_router
from timeboard.routes.health import router as health_router
from timeboard.routes.orgs import router as orgs_router
from timeboard.routes.projects import router as projects_router
from timeboard.routes.tasks import router as tasks_router
from timeboard.routes.timesheets import router as timesheets_router
from timeboard.routes.users import router as users_router

def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="timeboard-api", version="0.1.0")
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(orgs_router)
    app.include_router(users_router)
    app.include_router(clients_router)
    app.include_router(projects_router)
    app.include_router(tasks_router)
    app.include_router(timesheets_router)
    return app

app = create_app()
