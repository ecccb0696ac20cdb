from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api import posts as posts_api
from app.api import users as users_api
from app.api import auth as auth_api
from app.config import settings
from app.database import create_tables, dispose_engine
from app.errors import register_error_handlers
from app.logging_config import setup_logging


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE or None)

    app = FastAPI(title="DevConnector API")

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # 注册路由
    app.include_router(users_api.router, prefix="/api/users", tags=["用户"])
    app.include_router(auth_api.router, prefix="/api/auth", tags=["认证"])
    app.include_router(posts_api.router, prefix="/api/posts", tags=["动态"])

    @app.on_event("startup")
    async def startup():
        await create_tables()

    @app.on_event("shutdown")
    async def shutdown():
        await dispose_engine()

    @app.get("/")
    async def root():
        return {"msg": "API Running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
