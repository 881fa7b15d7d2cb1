import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.app_config import CORS_ORIGINS, GEMINI_MODEL, FALLBACK_GEMINI_MODEL, LOG_FILE
from models.content import DifficultyLevel, SocialPostType, UserLevel
from routes.content import router as content_router
from routes.saved_content import router as saved_content_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(LOG_FILE)
    ]
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Explorer Backend",
    description="AI-assisted content generation: text, placed images, quizzes and social posts",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(content_router)
app.include_router(saved_content_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Explorer Backend API",
        "version": "1.0.0",
        "model": GEMINI_MODEL,
        "fallback_model": FALLBACK_GEMINI_MODEL,
        "endpoints": {
            "generate_content": "/api/v1/generate-content",
            "generate_images": "/api/v1/generate-images",
            "generate_mcqs": "/api/v1/generate-mcqs",
            "generate_social_post": "/api/v1/generate-social-post",
            "saved_content": "/api/v1/saved-content",
            "health": "/health",
        },
        "social_post_types": [post_type.value for post_type in SocialPostType],
        "user_levels": [level.value for level in UserLevel],
        "mcq_difficulties": [difficulty.value for difficulty in DifficultyLevel],
    }


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
