import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import api...` work when running this folder alone.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.validation import router


@pytest.fixture
def client(monkeypatch):
    for name in (
        "KERNEL_BALANCE_TOLERANCE",
        "KERNEL_PHONE_FORMAT",
        "KERNEL_DEFAULT_TAX_RATE",
        "KERNEL_CURRENCY_SYMBOL",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's local .env out of the tests.
    monkeypatch.setattr("common.validation_kernel.config.load_dotenv", lambda *args, **kwargs: False)
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)
