#!/usr/bin/env python3
"""
Entry point for running the Household Budget server.

Usage:
    python run.py [--port PORT] [--host HOST] [--ledger PATH]
"""

import argparse
import logging
import os
import webbrowser
import qrcode
import uvicorn


def print_qr_code(url: str) -> None:
    """Print a QR code to the terminal so a phone can open the dashboard."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=1,
        border=1,
    )
    qr.add_data(url)
    qr.make(fit=True)

    # Print QR code using ASCII
    qr.print_ascii(invert=True)


def main():
    parser = argparse.ArgumentParser(description="Household Budget")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--ledger", help="SQLite ledger file (default: in the config dir)")
    parser.add_argument("--log-level", default="info", help="Logging level")
    parser.add_argument("--no-browser", action="store_true", help="Don't open browser")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.ledger:
        # Read by the app at startup, including in the reloader's subprocess
        os.environ["HOUSEHOLD_LEDGER"] = os.path.abspath(args.ledger)

    url = f"http://{args.host}:{args.port}"

    print("\n" + "=" * 50)
    print("  Household Budget")
    print("=" * 50)
    print(f"\n  URL: {url}\n")

    try:
        print_qr_code(url)
    except Exception:
        pass  # QR code is optional

    print("\n  Press Ctrl+C to stop the server\n")
    print("=" * 50 + "\n")

    if not args.no_browser:
        webbrowser.open(f"{url}/docs")

    uvicorn.run(
        "household.main:app",
        host=args.host,
        port=args.port,
        reload=True,
        log_level=args.log_level.lower()
    )


if __name__ == "__main__":
    main()
