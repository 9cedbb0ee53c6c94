#!/usr/bin/env python3

import os
import sys

# Change to the project root directory
project_root = os.path.dirname(os.path.abspath(__file__))
os.chdir(project_root)
sys.path.insert(0, project_root)

import logging
logging.basicConfig(level=os.getenv("FUNNELSCOPE_LOG_LEVEL", "INFO"))

print(f"Starting server from: {os.getcwd()}")

try:
    from funnelscope.main import app
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=int(os.getenv("PORT", "8000")), reload=False, access_log=True)

except Exception as e:
    print(f"Failed to start server: {e}")
    import traceback
    traceback.print_exc()
