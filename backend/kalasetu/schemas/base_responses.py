from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    status: str
    service: str
    version: str
    environment: str
    database: bool


class LiveHealthResponse(BaseModel):
    ok: bool
