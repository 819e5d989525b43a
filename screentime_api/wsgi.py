# screentime_api/wsgi.py
import os

import dotenv

dotenv.load_dotenv()

from screentime_api import create_app  # noqa: E402

app = create_app()


if __name__ == "__main__":
    app.run(
        host=os.getenv("SERVER_ADDRESS", "127.0.0.1"),
        port=int(os.getenv("SERVER_PORT", "8000")),
    )
