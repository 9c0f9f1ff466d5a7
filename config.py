"""
Configuration settings for the GymFlow workout and journal engine.
"""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO)
# Set SQLAlchemy logging to WARNING level to reduce verbosity
logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
logging.getLogger('sqlalchemy.engine.Engine').setLevel(logging.WARNING)
logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)

# Database and API config
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./gymflow.db")
LOCAL_STORE_DIR = os.getenv("LOCAL_STORE_DIR", "./local_history")
PORT = int(os.getenv("PORT", 8000))

# Default credential for the generation service. Routes resolve it per request;
# the engine itself only ever receives it as an explicit argument.
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

# GPT model to use
MODEL_NAME = os.getenv("MODEL_NAME", "gpt-3.5-turbo")
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", 30))
PLAN_MAX_TOKENS = 2000
JOURNAL_MAX_TOKENS = 1000

# Generator prompts
PLAN_SYSTEM_PROMPT = (
    "You are a professional fitness trainer. Generate detailed, personalized workout "
    "plans based on BMI and fitness goals. Always respond with valid JSON."
)

JOURNAL_SYSTEM_PROMPT = (
    "You are a supportive fitness coach and life advisor. Analyze daily journal entries "
    "and provide constructive feedback. Always respond with valid JSON."
)

# Human readable goal names used in prompts
GOAL_LABELS = {
    "lose": "Lose weight",
    "gain": "Build muscle",
    "maintain": "Maintain fitness",
}

# Local history collections
JOURNAL_COLLECTION = "gym-journal"
SCHEDULE_COLLECTION = "gym-schedules"
