"""
Startup script
Launches the uvicorn server on HOST/PORT from the environment.
"""

import sys

from core.config import settings


def main():
    """Main startup sequence"""
    print("=" * 60)
    print("Timeline Locator - Startup")
    print("=" * 60)
    print("POST /parse-timeline - Parse timeline JSON and extract points")
    print("GET  /health         - Health check")
    print("=" * 60)

    import uvicorn

    try:
        uvicorn.run(
            "main:app",
            host=settings.HOST,
            port=settings.PORT,
            log_level="info",
            access_log=True
        )
    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)


if __name__ == "__main__":
    main()
