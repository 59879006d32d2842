#!/usr/bin/env python3
"""
Run the insurance kernel HTTP API with uvicorn.

Usage:
  python3 scripts/serve.py [--host 127.0.0.1] [--port 8000] [--config PATH]
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Serve the insurance kernel API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--config", default=None, help="YAML settings file")
    return p.parse_args()


def main() -> int:
    args = _parse_args()

    import uvicorn

    from insurance_kernel.api.app import create_app
    from insurance_kernel.config import load_settings

    app = create_app(load_settings(args.config))
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
