from __future__ import annotations

import uvicorn

from investrisk.api import create_api_app
from investrisk.core.logging import setup_logging

setup_logging()

app = create_api_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
