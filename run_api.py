"""
FastAPI server entry point for the YouTube Transcript Summarizer.
"""

import os
import argparse
import uvicorn
from dotenv import load_dotenv


def main():
    """Run the FastAPI server."""
    # Load environment variables
    load_dotenv()

    # Parse command line arguments
    parser = argparse.ArgumentParser(description="YouTube Transcript Summarizer API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind the server to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind the server to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument("--models-dir", help="Directory containing a .gguf model")
    parser.add_argument("--timeout", type=float, help="Per-request deadline in seconds")
    args = parser.parse_args()

    # Overrides go through the environment so reloaded workers see them too.
    if args.models_dir:
        os.environ["MODELS_DIR"] = args.models_dir
    if args.timeout is not None:
        os.environ["REQUEST_TIMEOUT_SECONDS"] = str(args.timeout)

    from ytsummarizer.config import config

    print(f"Starting {config.APP_NAME} API server v{config.APP_VERSION}")
    print(f"Environment: {os.getenv('ENVIRONMENT', 'development')}")
    print(f"Models directory: {config.MODELS_DIR}")
    print(f"Request timeout: {config.REQUEST_TIMEOUT_SECONDS:g}s")
    print(f"Binding to: {args.host}:{args.port}")

    uvicorn.run(
        "ytsummarizer.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
