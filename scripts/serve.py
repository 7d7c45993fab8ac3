#!/usr/bin/env python3
from __future__ import annotations
import argparse

import uvicorn

from irecruit_core.api.app import create_app


def main() -> None:
    ap = argparse.ArgumentParser(description="Lance l'API iRecruit")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--log-level", default="info")
    args = ap.parse_args()
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
