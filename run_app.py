import uvicorn

from ipquery import settings


def main() -> None:
    """Run the ipquery FastAPI service with uvicorn."""
    uvicorn.run(
        "ipquery.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=True,
    )


if __name__ == "__main__":
    main()
