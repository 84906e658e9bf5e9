import logging
from fastapi import FastAPI
from tasktracker.config import LOG_LEVEL, PORT
from tasktracker.database import Base, engine
from tasktracker.error_handlers import register_error_handlers
from tasktracker.routers import tasks, users

logging.basicConfig(
	level=LOG_LEVEL,
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Task Tracker")

# API routers
app.include_router(users.router)
app.include_router(tasks.router)

register_error_handlers(app)


if __name__ == "__main__":
	import uvicorn
	uvicorn.run("tasktracker.main:app", host="0.0.0.0", port=PORT)
