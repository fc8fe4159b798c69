#!/usr/bin/env python3
"""
Runner for the PetroData Nexus API.
This script provides different modes for running the application.
"""
import sys
import argparse
import asyncio
import logging
from pathlib import Path


def setup_logging(level: str = "INFO"):
    """Setup logging configuration"""
    Path("logs").mkdir(exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("logs/petrodata.log", mode="a")
        ]
    )


def run_development(port: int):
    """Run in development mode with auto-reload"""
    import uvicorn

    setup_logging("DEBUG")

    print("🚀 Starting PetroData Nexus API in DEVELOPMENT mode...")
    print(f"📊 API Documentation: http://localhost:{port}/docs")
    print(f"🔍 Health Check: http://localhost:{port}/health")

    uvicorn.run(
        "petrodata.main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
        reload_dirs=["petrodata"],
        log_level="debug",
        access_log=True
    )


def run_production(port: int):
    """Run in production mode"""
    import uvicorn
    from petrodata.main import app

    setup_logging("INFO")

    print("🏭 Starting PetroData Nexus API in PRODUCTION mode...")
    print(f"📊 API Documentation: http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        log_level="info",
        access_log=True,
        workers=1
    )


def health_check(port: int) -> bool:
    """Perform a health check of the running API"""
    import httpx
    import time

    url = f"http://localhost:{port}/health"
    max_attempts = 3

    print("🔍 Performing health check...")

    for attempt in range(max_attempts):
        try:
            response = httpx.get(url, timeout=10)
            if response.status_code == 200:
                data = response.json()
                print("✅ Health check PASSED!")
                print(f"   Status: {data.get('status', 'unknown')}")
                print(f"   Database: {data.get('database', 'unknown')}")
                print(f"   Records: {data.get('record_count', 'unknown')}")
                return data.get("status") == "healthy"
            else:
                print(f"❌ Health check failed with status {response.status_code}")
        except httpx.ConnectError:
            print(f"🔄 Attempt {attempt + 1}/{max_attempts}: API not responding...")
            if attempt < max_attempts - 1:
                time.sleep(2)
        except Exception as e:
            print(f"❌ Health check error: {e}")

    print("❌ Health check FAILED after all attempts!")
    return False


def _container():
    from petrodata.shared.config.settings import get_settings
    from petrodata.shared.dependencies import build_app_config, configure_dependencies, get_container

    configure_dependencies(build_app_config(get_settings()))
    return get_container()


def seed_store() -> bool:
    """Seed the configured store with sample history if it is empty"""
    setup_logging("INFO")
    service = _container().get_report_record_service()
    inserted = asyncio.run(service.seed_if_empty())
    if inserted:
        print(f"🌱 Seeded {inserted} sample reports")
    else:
        print("ℹ️  Store already holds reports; nothing seeded")
    return True


def export_reports() -> bool:
    """Write every stored report to a dated CSV file in the downloads directory"""
    setup_logging("INFO")
    container = _container()
    records = asyncio.run(container.get_record_store().list_records())
    path = container.get_csv_exporter().export(records)
    print(f"📄 Exported {len(records)} reports to {path}")
    return True


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(description="PetroData Nexus API Runner")
    parser.add_argument(
        "command",
        choices=["dev", "prod", "health", "seed", "export"],
        help="Command to run"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Server port"
    )

    args = parser.parse_args()

    if args.command == "dev":
        run_development(args.port)
    elif args.command == "prod":
        run_production(args.port)
    elif args.command == "health":
        success = health_check(args.port)
        sys.exit(0 if success else 1)
    elif args.command == "seed":
        sys.exit(0 if seed_store() else 1)
    elif args.command == "export":
        sys.exit(0 if export_reports() else 1)


if __name__ == "__main__":
    main()
