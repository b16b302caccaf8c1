from fastapi import FastAPI
from fastapi.testclient import TestClient
from loguru import logger

from ludoteca.core.middleware import LoggingMiddleware, SecurityHeadersMiddleware

app = FastAPI()
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LoggingMiddleware)


@app.get("/")
def read_root():
    return {"Hello": "World"}


@app.get("/boom")
def boom():
    raise RuntimeError("falhou")


client = TestClient(app, raise_server_exceptions=False)


def test_logging_middleware_logs_access():
    messages = []
    sink_id = logger.add(lambda message: messages.append(message.record), level="INFO")
    try:
        response = client.get("/", headers={"X-Forwarded-For": "10.0.0.1, 10.0.0.2"})
    finally:
        logger.remove(sink_id)

    assert response.status_code == 200
    access = [record for record in messages if record["extra"].get("access")]
    assert access
    assert access[-1]["extra"]["status_code"] == 200
    assert access[-1]["extra"]["client_ip"] == "10.0.0.1"


def test_timing_header():
    response = client.get("/")
    assert response.status_code == 200
    assert "X-Process-Time" in response.headers
    assert float(response.headers["X-Process-Time"]) >= 0


def test_security_headers():
    response = client.get("/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "Strict-Transport-Security" not in response.headers


def test_unhandled_error_becomes_500():
    response = client.get("/boom")
    assert response.status_code == 500
    assert response.json()["error"] == "internal_server_error"
