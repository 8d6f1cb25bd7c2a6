from agentgate.logging_config import setup_logging
from agentgate.routes import create_app
from agentgate.settings import settings


# Configure logging once for the whole process.
setup_logging()

# FastAPI application instance for uvicorn.
app = create_app()


def run() -> None:
    import uvicorn

    # Logging is configured by agentgate.logging_config, not uvicorn.
    uvicorn.run("main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
