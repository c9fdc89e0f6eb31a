from shortlink_app.app_factory import create_app
from shortlink_app.config import settings

# Create FastAPI app
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
