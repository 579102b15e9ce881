# main.py
import os

import uvicorn

from ideor.app import app

# Run the server
if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=os.getenv("IDEOR_ENV", "development") == "development")
