"""
Main application entry point for the GymFlow fitness API.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from database import init_database
from journal_api import router as journal_router
from schedule_api import router as schedule_router
from workout_api import workout_router

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="GymFlow Fitness API",
    description="Workout plans, daily journal analysis and workout scheduling",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(workout_router)
app.include_router(journal_router)
app.include_router(schedule_router)


@app.on_event("startup")
async def startup():
    """Create the remote tables on application startup"""
    logger.info("DATABASE_URL: %s", config.DATABASE_URL)
    await init_database()
    logger.info("Local history directory: %s", config.LOCAL_STORE_DIR)


# Root endpoint for health check
@app.get("/")
async def root():
    """API health check endpoint"""
    return {
        "status": "online",
        "message": "GymFlow Fitness API is running",
        "version": "1.0.0",
        "aiConfigured": bool(config.OPENAI_API_KEY),
        "endpoints": {
            "workout": "/api/workout/*",
            "journal": "/api/journal/*",
            "schedule": "/api/schedule/*"
        }
    }


# Run the application
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT, reload=True)
