"""docspace API entrypoint.

Run with either:
    uvicorn main:app --reload --port 4000
    python main.py

The app is built here rather than in docspace.app, so importing docspace.app
has no side effects; tests build their own app around an in-memory store.
"""

import uvicorn

from docspace.app import add_request_id_middleware, create_app

app = create_app()
# Added last so it wraps everything else, CORS included
add_request_id_middleware(app)

__all__ = ["app"]


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=4000, log_config=None)
