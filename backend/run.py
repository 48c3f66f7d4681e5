#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Uses DATABASE_URL from the environment or backend/.env, falling back to the
local SQLite file.
"""
from pathlib import Path
import sys

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))

import uvicorn

if __name__ == "__main__":
    print("Starting Kalasetu availability API at http://localhost:8000 (docs at /docs)")

    uvicorn.run("kalasetu.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
