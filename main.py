"""Local development server: `python main.py`."""

from uvicorn import run

from blog_api.configs import settings


def main() -> None:
    # Logging is configured by the app's lifespan, not by uvicorn
    run(
        "blog_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        loop="uvloop",
        http="httptools",
        log_config=None,
    )


if __name__ == "__main__":
    main()
