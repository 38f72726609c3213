"""
Start the schedule API server or the Celery worker that applies format
changes to later weeks.

    python scripts/serve.py api --port 8000 --reload
    python scripts/serve.py worker --concurrency 2
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ofsl_schedule.core.config import LOG_LEVEL


def run_api(args):
    import uvicorn

    print("=" * 60)
    print("OFSL League Schedule API Server")
    print(f"Listening on http://{args.host}:{args.port} (docs at /docs)")
    print("=" * 60)

    uvicorn.run(
        "ofsl_schedule.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=LOG_LEVEL.lower()
    )


def run_worker(args):
    from ofsl_schedule.core.celery_app import celery_app

    # prefork is unavailable on Windows
    pool = "solo" if os.name == "nt" else args.pool

    print("=" * 60)
    print("OFSL League Schedule - Celery Worker")
    print(f"Pool: {pool}, concurrency: {args.concurrency}")
    print("=" * 60)

    celery_app.worker_main([
        "worker",
        f"--loglevel={LOG_LEVEL.lower()}",
        f"--concurrency={args.concurrency}",
        f"--pool={pool}"
    ])


def main():
    parser = argparse.ArgumentParser(description='OFSL League Schedule - run a service process')
    subparsers = parser.add_subparsers(dest='command', required=True)

    api = subparsers.add_parser('api', help='Run the FastAPI server')
    api.add_argument('--host', default='0.0.0.0')
    api.add_argument('--port', type=int, default=int(os.getenv("PORT", "8000")))
    api.add_argument('--reload', action='store_true', help='Reload on code changes')
    api.set_defaults(func=run_api)

    worker = subparsers.add_parser('worker', help='Run the Celery worker')
    worker.add_argument('--concurrency', type=int, default=2)
    worker.add_argument('--pool', default='prefork')
    worker.set_defaults(func=run_worker)

    args = parser.parse_args()
    args.func(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
