import uvicorn

from .config import settings


def run() -> None:
    uvicorn.run("users_service.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
