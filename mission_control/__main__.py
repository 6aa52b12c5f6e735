"""Run the dashboard with uvicorn: ``python -m mission_control``."""

from mission_control.core.config import settings

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("mission_control:app", host=settings.host, port=settings.port, reload=False)
