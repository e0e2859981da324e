import uvicorn

from customer_api.config import settings


def main():
    uvicorn.run(
        "customer_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
