"""Run the API server."""
import uvicorn

from restaurant_ops.core.config import settings


def main() -> None:
    uvicorn.run("restaurant_ops.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
