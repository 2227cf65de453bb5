#!/usr/bin/env python3
"""
Server startup wrapper for the Upraze momentum service.
"""
import os
import sys


def main() -> None:
    host = os.getenv("UPRAZE_HOST", "0.0.0.0")
    port = int(os.getenv("UPRAZE_PORT", "8000"))

    print("[Upraze] Starting momentum service")
    print(f"[Upraze] Server: http://{host}:{port}")
    print("[Upraze] Press CTRL+C to stop")
    print()

    try:
        import uvicorn
        uvicorn.run(
            "upraze.main:app",
            host=host,
            port=port,
            reload=False,
            log_level="info",
            access_log=True
        )
    except KeyboardInterrupt:
        print("\n[Upraze] Shutting down...")
        sys.exit(0)


if __name__ == "__main__":
    main()
