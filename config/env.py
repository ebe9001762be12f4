import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")

SOURCE_PASSWORD: str | None = os.getenv("SOURCE_PASSWORD")
