"""Entry point for running the backend server."""

import logging
import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from .config import ENV_HOST, ENV_LOG_LEVEL, ENV_PORT

# 加载 .env 文件（优先从 backend 目录，其次从项目根目录）
backend_dir = Path(__file__).parent
project_root = backend_dir.parent.parent

for env_file in (backend_dir / ".env", project_root / ".env"):
    if env_file.exists():
        load_dotenv(env_file)
        break

logging.basicConfig(
    level=os.environ.get(ENV_LOG_LEVEL, "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

if __name__ == "__main__":
    uvicorn.run(
        "wayfarer.backend.app:create_app",
        factory=True,
        host=os.environ.get(ENV_HOST, "127.0.0.1"),
        port=int(os.environ.get(ENV_PORT, "8000")),
    )
