import uvicorn

from korelium.core.config import settings


def main() -> None:
    uvicorn.run("korelium.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
