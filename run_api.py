"""Run the CV converter API from project root. Use: python run_api.py"""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "cm_calculators.api:create_app",
        factory=True,
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
    )
