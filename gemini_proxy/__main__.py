"""Run the standalone server on the port supplied by the environment."""

import uvicorn

from gemini_proxy.config import get_settings


def main() -> None:
    settings = get_settings()
    # log_config=None keeps uvicorn's loggers on the JSON root handler.
    uvicorn.run("gemini_proxy.main:app", host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":  # pragma: no cover
    main()
