import os

import uvicorn

if __name__ == "__main__":
    print("🍽️  Starting restaurant website API...")

    # Start the server
    uvicorn.run(
        "restaurant_site.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
