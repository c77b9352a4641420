import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from db import init_db
from guidance.config import get_settings
from guidance.routes import router as guidance_router

load_dotenv()

settings = get_settings()
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logging.info("App starting")

app = FastAPI(title="Career Guidance API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

init_db()

app.include_router(guidance_router)


@app.get("/")
def root():
    return {"status": "ok"}
