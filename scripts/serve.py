#!/usr/bin/env python3
"""
scripts/serve.py
================
Start the SunMoon-Core solver server.

Usage:
    python scripts/serve.py --host 0.0.0.0 --port 8000 --reload
"""
import argparse
import logging
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


def main():
    parser = argparse.ArgumentParser(description="SunMoon-Core Solver Server")
    parser.add_argument("--host",   default="0.0.0.0", help="Bind host")
    parser.add_argument("--port",   default=8000, type=int, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Hot reload")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    print(f"Starting SunMoon-Core server on {args.host}:{args.port}")

    try:
        from sunmoon.deployment.server.app import serve
        serve(host=args.host, port=args.port, reload=args.reload)
    except ImportError:
        print("Server requires: pip install sunmoon-core")
        sys.exit(1)


if __name__ == "__main__":
    main()
