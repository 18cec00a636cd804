import logging

import uvicorn

from mealwise.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

from mealwise.api.api_run import app  # noqa: E402


def run():
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Mealwise API running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
