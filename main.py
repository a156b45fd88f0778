"""Entry point for `uvicorn main:app` from the repository root."""

import uvicorn

from arthaus.core.config import settings
from arthaus.main import app

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=settings.log_level.lower())
